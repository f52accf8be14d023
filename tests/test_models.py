"""
Tests for Bill Splitter models and configuration

Test strategy:
1. Unit tests for individual components (models, settings, audit)
2. Flow tests live in test_orchestrator.py (against tmp_path, no real files)
"""

import pytest
from pydantic import ValidationError
from uuid import uuid4

from splitbill.audit import AuditLogger
from splitbill.config import LoggingSettings, ProcessingSettings, get_settings
from splitbill.models.bill import (
    BillInput,
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


class TestBillModels:
    """Tests for bill-related Pydantic models."""

    def test_bill_input_from_wire_names(self, raw_bill):
        """Test BillInput accepts camelCase JSON."""
        bill = BillInput.model_validate(raw_bill)
        assert bill.tip_percentage == 10
        assert bill.items[0].is_shared is True
        assert bill.items[2].person == "Bob"

    def test_bill_input_from_python_names(self):
        """Test BillInput accepts snake_case keywords."""
        bill = BillInput(
            date="2024-03-21",
            location="Cafe",
            tip_percentage=15,
            items=[SharedBillItem(name="Bread", price=3)],
        )
        assert bill.items[0].price == 3

    def test_item_split_helpers(self, raw_bill):
        """Test shared_items / personal_items."""
        bill = BillInput.model_validate(raw_bill)
        assert [item.name for item in bill.shared_items] == ["Pizza"]
        assert [item.name for item in bill.personal_items] == ["Coke", "Coffee"]

    def test_bill_input_is_frozen(self, raw_bill):
        """Test that a validated bill cannot be changed."""
        bill = BillInput.model_validate(raw_bill)
        with pytest.raises(ValidationError):
            bill.location = "Elsewhere"

    def test_item_rejects_negative_price(self):
        """Test that negative prices are rejected."""
        with pytest.raises(ValidationError):
            PersonalBillItem(name="Refund", price=-1, person="Alice")

    def test_item_rejects_string_price(self):
        """Test that prices are not coerced from text."""
        with pytest.raises(ValidationError):
            SharedBillItem(name="Bread", price="3")

    def test_bill_needs_items(self):
        """Test that an empty item list is rejected."""
        with pytest.raises(ValidationError):
            BillInput(date="2024-03-21", location="Cafe", tip_percentage=0, items=[])

    def test_discriminator_picks_personal(self):
        """Test isShared=false selects the personal item model."""
        bill = BillInput.model_validate({
            "date": "2024-03-21",
            "location": "Cafe",
            "tipPercentage": 0,
            "items": [{"name": "Tea", "price": 2, "isShared": False, "person": "Kim"}],
        })
        assert isinstance(bill.items[0], PersonalBillItem)

    def test_bill_output_dumps_wire_names(self):
        """Test BillOutput serializes with camelCase keys."""
        output = BillOutput(
            date="2024年3月21日",
            location="Cafe",
            sub_total=100,
            tip=10,
            total_amount=110,
            items=[PersonItem(name="Alice", amount=55), PersonItem(name="Bob", amount=55)],
        )
        data = output.to_json_dict()
        assert data == {
            "date": "2024年3月21日",
            "location": "Cafe",
            "subTotal": 100,
            "tip": 10,
            "totalAmount": 110,
            "items": [
                {"name": "Alice", "amount": 55},
                {"name": "Bob", "amount": 55},
            ],
        }
        assert output.has_participants is True

    def test_person_item_is_mutable(self):
        """Test reconciliation can adjust an amount in place."""
        item = PersonItem(name="Alice", amount=3.3)
        item.amount = 3.4
        assert item.amount == 3.4


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_validation_result_has_errors(self):
        """Test has_errors property."""
        result = ValidationResult(
            schema_valid=False,
            semantic_valid=False,
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="items",
                    issue_type="invalid_value",
                    message="List should have at least 1 item",
                    severity="error",
                ),
            ],
        )
        assert result.has_errors is True
        assert result.error_count == 1

    def test_validation_result_warnings_only(self):
        """Test that warnings don't count as errors."""
        result = ValidationResult(
            schema_valid=True,
            semantic_valid=True,
            is_valid=True,
            issues=[
                ValidationIssue(
                    field="date",
                    issue_type="invalid_format",
                    message="Date is not in YYYY-MM-DD form",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors is False
        assert result.error_count == 0
        assert len(result.warnings) == 1

    def test_issue_severity_is_checked(self):
        """Test that unknown severities are rejected."""
        with pytest.raises(ValidationError):
            ValidationIssue(field="x", issue_type="y", message="z", severity="fatal")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.FILE_RECEIVED,
            description="Reading bill file",
        )
        assert event.event_type == AuditEventType.FILE_RECEIVED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        correlation_id = uuid4()
        event = AuditEventBuilder.bill_split(
            source="bill.json",
            location="Cafe",
            participants=2,
            total_amount=126.5,
            correlation_id=correlation_id,
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "bill_split"
        assert log_dict["entity"] == "bill.json"
        assert log_dict["correlation_id"] == str(correlation_id)
        assert log_dict["details"]["participants"] == 2

    def test_builder_file_failed(self):
        """Test AuditEventBuilder.file_failed."""
        event = AuditEventBuilder.file_failed(
            source="bad.json",
            error_code="BillFormatError",
            error_message="Malformed JSON",
        )
        assert event.severity == AuditSeverity.ERROR
        assert event.error_code == "BillFormatError"

    def test_builder_batch_completed_severity(self):
        """Test failed batches are logged as warnings."""
        clean = AuditEventBuilder.batch_completed(input_dir="in", processed=3, failed=0)
        dirty = AuditEventBuilder.batch_completed(input_dir="in", processed=3, failed=1)
        assert clean.severity == AuditSeverity.INFO
        assert dirty.severity == AuditSeverity.WARNING

    def test_audit_logger_keeps_events(self):
        """Test AuditLogger records what it logs."""
        logger = AuditLogger()
        logger.log(AuditEventBuilder.file_received(source="a.json"))
        logger.log_error(error_type="KeyError", error_message="boom")

        assert [event.event_type for event in logger.events] == [
            AuditEventType.FILE_RECEIVED,
            AuditEventType.SYSTEM_ERROR,
        ]
        assert len(logger.events_of_type(AuditEventType.SYSTEM_ERROR)) == 1


class TestSettings:
    """Tests for pydantic-settings configuration."""

    def test_defaults(self):
        """Test default processing settings."""
        settings = ProcessingSettings()
        assert settings.input_glob == "*.json"
        assert settings.output_indent == 2
        assert settings.encoding == "utf-8"

    def test_env_override(self, monkeypatch):
        """Test values come from SPLITBILL_ environment variables."""
        monkeypatch.setenv("SPLITBILL_OUTPUT_INDENT", "4")
        monkeypatch.setenv("SPLITBILL_LOG_LEVEL", "debug")
        settings = get_settings()
        assert settings.processing.output_indent == 4
        assert settings.logging.level == "DEBUG"

    def test_rejects_unknown_log_level(self):
        """Test log level validation."""
        with pytest.raises(ValidationError):
            LoggingSettings(level="LOUD")

    def test_rejects_unknown_log_format(self):
        """Test log format validation."""
        with pytest.raises(ValidationError):
            LoggingSettings(format="xml")

    def test_settings_are_cached(self):
        """Test get_settings returns the same object."""
        assert get_settings() is get_settings()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
