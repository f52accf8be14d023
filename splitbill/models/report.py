"""
Batch Processing Report

Summarises one directory run: how many files were seen, how many were
split, and why the others failed. A failed file never aborts the batch.
"""

from pathlib import Path

from pydantic import BaseModel, Field


class FileFailure(BaseModel):
    """One input file that could not be split."""

    file: str = Field(
        ...,
        description="File name relative to the input directory"
    )
    error_kind: str = Field(
        ...,
        description="Error class name, e.g. 'BillFormatError'"
    )
    message: str
    exit_code: int = Field(
        ...,
        description="Exit status this failure would map to on its own"
    )


class BatchReport(BaseModel):
    """Outcome of processing every bill file in a directory."""

    input_dir: Path
    output_dir: Path
    processed: int = Field(default=0, ge=0)
    succeeded: list[str] = Field(default_factory=list)
    failures: list[FileFailure] = Field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def all_succeeded(self) -> bool:
        return not self.failures
