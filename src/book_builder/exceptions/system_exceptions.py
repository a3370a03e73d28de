"""
System-wide exception classes for Book Builder.

This module defines the base of the error hierarchy together with the errors
raised while loading files from a book directory. Errors keep a list of
context frames that is extended while they unwind, so the final message shows
which file and which field were being processed.
"""

from pathlib import Path
from typing import List, Optional, Union


class BookBuilderError(Exception):
    """
    Base exception class for Book Builder.

    Attributes:
        message: Human-readable error description
        context: Context frames, innermost first
        original_exception: Underlying error that caused this one, if any
    """

    def __init__(
        self,
        message: str,
        context: Optional[List[str]] = None,
        original_exception: Optional[BaseException] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context: List[str] = list(context or [])
        self.original_exception = original_exception

    def add_context(self, frame: str) -> "BookBuilderError":
        """
        Record what was being processed when the error passed through.

        Args:
            frame: Short description such as "While parsing section 2 (content)"

        Returns:
            The same error, so callers can ``raise err.add_context(...)``
        """
        self.context.append(frame)
        return self

    def __str__(self) -> str:
        """Return the message preceded by the context chain, outermost first."""
        lines = [frame for frame in reversed(self.context)]
        lines.append(self.message)
        if self.original_exception is not None:
            lines.append(f"Caused by: {self.original_exception}")
        return "\n".join(lines)


class DocumentLoadError(BookBuilderError):
    """Raised when a file of the book directory cannot be loaded."""

    def __init__(
        self,
        message: str,
        file_path: Optional[Union[str, Path]] = None,
        field: Optional[str] = None,
        original_exception: Optional[BaseException] = None
    ) -> None:
        """
        Initialize load error.

        Args:
            message: Error description
            file_path: File whose loading failed
            field: Logical part of the book being loaded (e.g. "recipes.pasta")
            original_exception: Underlying error
        """
        super().__init__(message, original_exception=original_exception)
        self.file_path = str(file_path) if file_path is not None else None
        self.field = field

    def __str__(self) -> str:
        msg = super().__str__()
        details = []
        if self.field:
            details.append(f"Field: {self.field}")
        if self.file_path:
            details.append(f"File: {self.file_path}")
        if details:
            msg = f"{msg}\n" + "\n".join(details)
        return msg


class DocumentIOError(DocumentLoadError):
    """Raised when a file is missing or cannot be read."""
