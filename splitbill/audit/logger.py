"""
Audit Logger

DESIGN DECISION: Every significant step of a split run is logged.
This provides:
1. Traceability of batch runs (which file failed and why)
2. Visibility into rounding corrections
3. Debugging capability

The audit logger:
- Writes structured lines through structlog
- Keeps the events of the current run in memory for summaries
- Supports correlation IDs to tie together all files of one batch
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from splitbill.config import LoggingSettings
from splitbill.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog on top of stdlib logging.

    Safe to call more than once; the last call wins.
    """
    settings = settings or LoggingSettings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=settings.level,
        force=True,
    )

    renderer = (
        structlog.dev.ConsoleRenderer()
        if settings.format == "console"
        else structlog.processors.JSONRenderer(ensure_ascii=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


class AuditLogger:
    """
    Central audit logging service.

    Every event is written to the structured log and appended to
    `events`, so the caller can inspect the trail of the current run.
    """

    def __init__(self, name: str = "splitbill.audit"):
        self._logger = structlog.get_logger(name)
        self.events: list[AuditEvent] = []

    def log(self, event: AuditEvent) -> None:
        """Log an audit event, routed by severity."""
        self.events.append(event)
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an unexpected error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))

    def events_of_type(self, event_type) -> list[AuditEvent]:
        return [event for event in self.events if event.event_type == event_type]


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use one per CLI invocation; every file of a batch shares it.
    """
    return uuid4()
