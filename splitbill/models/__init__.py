"""
Data Models Package

This package contains all Pydantic models used in the Bill Splitter.
All data flowing through the system must conform to these schemas.
"""

from splitbill.models.bill import (
    BillInput,
    BillItem,
    BillOutput,
    PersonalBillItem,
    PersonItem,
    SharedBillItem,
    ValidationIssue,
    ValidationResult,
)
from splitbill.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from splitbill.models.report import BatchReport, FileFailure

__all__ = [
    # Bill models
    "BillInput",
    "BillItem",
    "BillOutput",
    "PersonalBillItem",
    "PersonItem",
    "SharedBillItem",
    "ValidationIssue",
    "ValidationResult",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Batch models
    "BatchReport",
    "FileFailure",
]
