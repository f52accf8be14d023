"""
Error Taxonomy for the File and CLI Layer

The splitting core never raises for a validated bill. Everything that can
go wrong happens around it: bad arguments, unreadable files, malformed
JSON, bills that fail validation. Each kind maps to its own exit status.
"""

from typing import Optional

from splitbill.models.bill import ValidationIssue


class SplitterError(Exception):
    """Base exception for bill splitter errors."""

    exit_code: int = 1


class ArgumentError(SplitterError):
    """Missing or malformed command line arguments."""

    exit_code = 2


class FileAccessError(SplitterError):
    """Input or output path is missing, of the wrong kind, or unreadable."""

    exit_code = 3

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(message)


class PermissionDeniedError(FileAccessError):
    """Not allowed to read the input or write the output."""

    exit_code = 4


class BillFormatError(SplitterError):
    """Input is not valid JSON or not a valid bill."""

    exit_code = 5

    def __init__(
        self,
        message: str,
        issues: Optional[list[ValidationIssue]] = None,
        path: Optional[str] = None,
    ):
        self.issues = issues or []
        self.path = path
        super().__init__(message)

    def issue_summary(self) -> str:
        """One line per error-level issue."""
        return "\n".join(
            f"{issue.field}: {issue.message}"
            for issue in self.issues
            if issue.severity == "error"
        )
