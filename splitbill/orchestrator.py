"""
Main Orchestrator for Bill Splitter

This module ties together validation, the splitting core, the audit log
and the file system. It defines the end-to-end flows for:
1. Split (decoded JSON → validate → split → audit)
2. Single file (read → split → write)
3. Batch (every bill file in a directory, continuing past failures)

DESIGN DECISION: The orchestrator enforces the boundaries:
- The core only ever sees a validated BillInput
- OS and JSON errors are classified into SplitterError kinds here
- Every file outcome is audited
"""

import json
from pathlib import Path
from typing import Any, Optional, Union
from uuid import UUID

from splitbill.audit import AuditLogger, create_correlation_id
from splitbill.config import ProcessingSettings, get_settings
from splitbill.errors import (
    BillFormatError,
    FileAccessError,
    PermissionDeniedError,
    SplitterError,
)
from splitbill.models.audit import AuditEventBuilder
from splitbill.models.bill import BillOutput
from splitbill.models.report import BatchReport, FileFailure
from splitbill.splitting import split_bill_with_drift
from splitbill.validation import BillInputValidator


PathLike = Union[str, Path]


class BillSplitFlow:
    """
    Orchestrates splitting one decoded bill document.

    Flow:
    1. Validate → BillInput (or BillFormatError)
    2. Split → BillOutput
    3. Audit → split, empty split, rounding adjustment
    """

    def __init__(
        self,
        validator: Optional[BillInputValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._validator = validator or BillInputValidator()
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    def split(
        self,
        raw: Any,
        source: Optional[str] = None,
        correlation_id: Optional[UUID] = None,
    ) -> BillOutput:
        """
        Validate and split a decoded bill.

        Raises:
            BillFormatError: if the document is not a valid bill
        """
        result = self._validator.validate(raw)
        if not result.is_valid:
            self._audit_logger.log(AuditEventBuilder.validation_failed(
                source=source,
                issues=[issue.model_dump() for issue in result.issues],
                correlation_id=correlation_id,
            ))
            raise BillFormatError(
                f"Invalid bill: {result.error_count} error(s)",
                issues=result.issues,
                path=source,
            )

        output, drift = split_bill_with_drift(result.bill)

        if not output.has_participants:
            self._audit_logger.log(AuditEventBuilder.empty_split(
                source=source,
                location=output.location,
                correlation_id=correlation_id,
            ))
        elif drift:
            self._audit_logger.log(AuditEventBuilder.rounding_adjusted(
                source=source,
                person=output.items[0].name,
                diff=drift,
                correlation_id=correlation_id,
            ))

        self._audit_logger.log(AuditEventBuilder.bill_split(
            source=source,
            location=output.location,
            participants=len(output.items),
            total_amount=output.total_amount,
            correlation_id=correlation_id,
        ))
        return output


class BillFileProcessor:
    """
    Reads bill JSON files, splits them, and writes the results.

    A single file failure raises. In directory mode each failure is
    recorded in the BatchReport and the remaining files are still processed.
    """

    def __init__(
        self,
        flow: Optional[BillSplitFlow] = None,
        settings: Optional[ProcessingSettings] = None,
        correlation_id: Optional[UUID] = None,
    ):
        self._flow = flow or BillSplitFlow()
        self._settings = settings or get_settings().processing
        self._correlation_id = correlation_id or create_correlation_id()

    @property
    def audit_logger(self) -> AuditLogger:
        return self._flow.audit_logger

    def _read_json(self, path: Path) -> Any:
        try:
            text = path.read_text(encoding=self._settings.encoding)
        except PermissionError as e:
            raise PermissionDeniedError(str(path), f"Permission denied reading {path}") from e
        except FileNotFoundError as e:
            raise FileAccessError(str(path), f"Input file not found: {path}") from e
        except IsADirectoryError as e:
            raise FileAccessError(str(path), f"Expected a file but found a directory: {path}") from e
        except UnicodeDecodeError as e:
            raise BillFormatError(f"{path} is not {self._settings.encoding} text", path=str(path)) from e
        except OSError as e:
            raise FileAccessError(str(path), f"Could not read {path}: {e}") from e

        if not text.strip():
            raise BillFormatError(f"{path} is empty", path=str(path))
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise BillFormatError(f"Malformed JSON in {path}: {e}", path=str(path)) from e

    def _write_json(self, path: Path, output: BillOutput) -> None:
        indent = self._settings.output_indent or None
        data = json.dumps(output.to_json_dict(), ensure_ascii=False, indent=indent)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(data, encoding=self._settings.encoding)
        except PermissionError as e:
            raise PermissionDeniedError(str(path), f"Permission denied writing {path}") from e
        except OSError as e:
            raise FileAccessError(str(path), f"Could not write {path}: {e}") from e

    def process_file(self, input_path: PathLike, output_path: PathLike) -> BillOutput:
        """
        Split one bill file.

        Raises:
            SplitterError: any read, format, validation or write failure
        """
        input_path = Path(input_path)
        output_path = Path(output_path)
        source = str(input_path)

        self.audit_logger.log(AuditEventBuilder.file_received(
            source=source,
            correlation_id=self._correlation_id,
        ))

        raw = self._read_json(input_path)
        output = self._flow.split(raw, source=source, correlation_id=self._correlation_id)
        self._write_json(output_path, output)

        self.audit_logger.log(AuditEventBuilder.output_written(
            source=source,
            destination=str(output_path),
            correlation_id=self._correlation_id,
        ))
        return output

    def process_directory(self, input_dir: PathLike, output_dir: PathLike) -> BatchReport:
        """
        Split every bill file in input_dir into output_dir (same file names).

        Files are processed in name order. Failures are recorded, not raised.
        """
        input_dir = Path(input_dir)
        output_dir = Path(output_dir)
        report = BatchReport(input_dir=input_dir, output_dir=output_dir)

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            files = sorted(
                path for path in input_dir.glob(self._settings.input_glob)
                if path.is_file()
            )
        except PermissionError as e:
            raise PermissionDeniedError(str(output_dir), f"Permission denied: {e}") from e
        except OSError as e:
            raise FileAccessError(str(input_dir), f"Could not list {input_dir}: {e}") from e

        self.audit_logger.log(AuditEventBuilder.batch_started(
            input_dir=str(input_dir),
            file_count=len(files),
            correlation_id=self._correlation_id,
        ))

        for path in files:
            report.processed += 1
            try:
                self.process_file(path, output_dir / path.name)
            except SplitterError as e:
                self.audit_logger.log(AuditEventBuilder.file_failed(
                    source=str(path),
                    error_code=type(e).__name__,
                    error_message=str(e),
                    correlation_id=self._correlation_id,
                ))
                report.failures.append(FileFailure(
                    file=path.name,
                    error_kind=type(e).__name__,
                    message=str(e),
                    exit_code=e.exit_code,
                ))
            else:
                report.succeeded.append(path.name)

        self.audit_logger.log(AuditEventBuilder.batch_completed(
            input_dir=str(input_dir),
            processed=report.processed,
            failed=report.failed_count,
            correlation_id=self._correlation_id,
        ))
        return report

    def run(
        self,
        input_path: PathLike,
        output_path: PathLike,
    ) -> Union[BillOutput, BatchReport]:
        """Process a single file or a whole directory, depending on input_path."""
        input_path = Path(input_path)
        try:
            is_file = input_path.is_file()
            is_dir = input_path.is_dir()
            exists = input_path.exists()
        except PermissionError as e:
            raise PermissionDeniedError(str(input_path), f"Permission denied: {input_path}") from e

        if is_file:
            return self.process_file(input_path, output_path)
        if is_dir:
            return self.process_directory(input_path, output_path)
        if not exists:
            raise FileAccessError(str(input_path), f"Input path not found: {input_path}")
        raise FileAccessError(str(input_path), f"Unsupported input type: {input_path}")


def create_app_components(
    correlation_id: Optional[UUID] = None,
) -> tuple[BillSplitFlow, BillFileProcessor]:
    """
    Factory function to create all application components.

    Both components share one audit logger and correlation ID.

    Returns:
        (split_flow, file_processor)
    """
    audit_logger = AuditLogger()
    split_flow = BillSplitFlow(audit_logger=audit_logger)
    file_processor = BillFileProcessor(
        flow=split_flow,
        correlation_id=correlation_id or create_correlation_id(),
    )
    return split_flow, file_processor
