from __future__ import annotations


class SheetAnalysisError(ValueError):
    """Base class for document-level analysis failures."""


class UnknownExamTypeError(SheetAnalysisError):
    def __init__(self, exam_type: str) -> None:
        super().__init__(f"Unknown exam type: {exam_type!r}")
        self.exam_type = exam_type


class UnrecognizedFormatError(SheetAnalysisError):
    def __init__(self, message: str = "Unrecognized response sheet format.") -> None:
        super().__init__(message)


class NoQuestionsParsedError(SheetAnalysisError):
    def __init__(self, source_format: str = "") -> None:
        message = "Could not parse questions from the response sheet."
        if source_format:
            message += f" The document looked like the {source_format} format, but its markup may have changed."
        super().__init__(message)
        self.source_format = source_format
