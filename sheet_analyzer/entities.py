from __future__ import annotations

import html as html_lib
import re

_SUP_SQUARE = re.compile(r"<sup[^>]*>\s*2\s*</sup>", re.I)
_SUP_CUBE = re.compile(r"<sup[^>]*>\s*3\s*</sup>", re.I)
_SUP_DIGITS = re.compile(r"<sup[^>]*>\s*(\d+)\s*</sup>", re.I)
_SUB_DIGITS = re.compile(r"<sub[^>]*>\s*(\d+)\s*</sub>", re.I)
_BLOCK_END = re.compile(r"<br\s*/?>|</p\s*>|</div\s*>|</li\s*>", re.I)
_TAG = re.compile(r"<[^>]*>")
_SPACES = re.compile(r"\s+")

# Entities html.unescape does not know about, seen in vendor markup.
_EXTRA_ENTITIES = {
    "&rupee;": "₹",
}

_FORMULA_TOKENS = (
    (re.compile(r"begin\s+mathsize\s+\d+px\s+style\s*", re.I), ""),
    (re.compile(r"\s*end\s+style\s*$", re.I), ""),
    (re.compile(r" space "), " "),
    (re.compile(r" comma "), ", "),
    (re.compile(r" squared "), "² "),
)


def decode(fragment: object) -> str:
    if not isinstance(fragment, str) or not fragment:
        return ""

    text = _SUP_SQUARE.sub("²", fragment)
    text = _SUP_CUBE.sub("³", text)
    text = _SUP_DIGITS.sub(r"^\1", text)
    text = _SUB_DIGITS.sub("₍\\1₎", text)
    text = _BLOCK_END.sub("\n", text)
    text = _TAG.sub("", text)

    for entity, char in _EXTRA_ENTITIES.items():
        text = text.replace(entity, char)
    text = html_lib.unescape(text)

    lines = (_SPACES.sub(" ", line).strip() for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def clean_formula_alt(alt: object) -> str:
    """Turn the spoken-math alt text of a formula image into readable text."""
    if not isinstance(alt, str):
        return ""
    text = html_lib.unescape(alt)
    for pattern, repl in _FORMULA_TOKENS:
        text = pattern.sub(repl, text)
    return text.strip()
