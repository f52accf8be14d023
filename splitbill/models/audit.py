"""
Audit Models for Bill Splitter

Every significant step of a split run is recorded as an AuditEvent:
a file being read, a bill being split, a rounding correction, a failure.
This lets a batch run be reconstructed from its log alone.

DESIGN DECISION: Audit events are append-only. We never modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Input
    FILE_RECEIVED = "file_received"
    VALIDATION_FAILED = "validation_failed"

    # Splitting
    BILL_SPLIT = "bill_split"
    EMPTY_SPLIT = "empty_split"
    ROUNDING_ADJUSTED = "rounding_adjusted"

    # Output
    OUTPUT_WRITTEN = "output_written"
    FILE_FAILED = "file_failed"

    # Batch
    BATCH_STARTED = "batch_started"
    BATCH_COMPLETED = "batch_completed"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what is this about? Usually a file path.
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'file', 'bill', 'batch')"
    )
    entity: Optional[str] = Field(
        default=None,
        description="Identifier of the entity, e.g. the input path"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., all files in one batch)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity": self.entity,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.file_received(path, correlation_id)
        event = AuditEventBuilder.bill_split(source, output, correlation_id)
    """

    @staticmethod
    def file_received(
        source: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILE_RECEIVED,
            severity=AuditSeverity.DEBUG,
            entity_type="file",
            entity=source,
            correlation_id=correlation_id,
            description=f"Reading bill file: {source}",
        )

    @staticmethod
    def validation_failed(
        source: Optional[str],
        issues: list[dict],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            entity_type="bill",
            entity=source,
            correlation_id=correlation_id,
            description=f"Bill rejected with {len(issues)} issues",
            details={
                "issues": issues,
            },
        )

    @staticmethod
    def bill_split(
        source: Optional[str],
        location: str,
        participants: int,
        total_amount: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BILL_SPLIT,
            entity_type="bill",
            entity=source,
            correlation_id=correlation_id,
            description=f"Bill split: {location} - {total_amount} across {participants} people",
            details={
                "location": location,
                "participants": participants,
                "total_amount": total_amount,
            },
        )

    @staticmethod
    def empty_split(
        source: Optional[str],
        location: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EMPTY_SPLIT,
            severity=AuditSeverity.WARNING,
            entity_type="bill",
            entity=source,
            correlation_id=correlation_id,
            description=f"No personal items on bill from {location}; nothing allocated",
            details={
                "location": location,
            },
        )

    @staticmethod
    def rounding_adjusted(
        source: Optional[str],
        person: str,
        diff: float,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ROUNDING_ADJUSTED,
            entity_type="bill",
            entity=source,
            correlation_id=correlation_id,
            description=f"Rounding drift of {diff} assigned to {person}",
            details={
                "person": person,
                "diff": diff,
            },
        )

    @staticmethod
    def output_written(
        source: str,
        destination: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OUTPUT_WRITTEN,
            entity_type="file",
            entity=source,
            correlation_id=correlation_id,
            description=f"Processed {source} -> {destination}",
            details={
                "destination": destination,
            },
        )

    @staticmethod
    def file_failed(
        source: str,
        error_code: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FILE_FAILED,
            severity=AuditSeverity.ERROR,
            entity_type="file",
            entity=source,
            correlation_id=correlation_id,
            description=f"Failed to process {source}",
            error_code=error_code,
            error_message=error_message,
        )

    @staticmethod
    def batch_started(
        input_dir: str,
        file_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BATCH_STARTED,
            entity_type="batch",
            entity=input_dir,
            correlation_id=correlation_id,
            description=f"Batch started: {file_count} JSON files in {input_dir}",
            details={
                "file_count": file_count,
            },
        )

    @staticmethod
    def batch_completed(
        input_dir: str,
        processed: int,
        failed: int,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.BATCH_COMPLETED,
            severity=AuditSeverity.WARNING if failed else AuditSeverity.INFO,
            entity_type="batch",
            entity=input_dir,
            correlation_id=correlation_id,
            description=f"Batch completed: {processed} files processed, {failed} failed",
            details={
                "processed": processed,
                "failed": failed,
            },
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_code=error_type,
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
