"""
Two-Stage Bill Validation

The splitting core trusts its input completely. This module is the only
way untyped JSON becomes a BillInput.

STAGE 1 - SCHEMA VALIDATION:
- The document is an object
- Required fields are present with the right types
- Numeric constraints (non-negative prices and tip, at least one item)
- Personal items name their owner
This is delegated to the pydantic models.

STAGE 2 - SEMANTIC VALIDATION:
- Personal items have a non-blank owner
- Date shape (warning only; the formatter copes with anything)
- Bills with no personal items (warning; the split will be empty)
- Unusually high tip percentages (warning)

IMPORTANT: Validation never fixes anything. It reports.
"""

import re
from typing import Any, Optional

from pydantic import ValidationError

from splitbill.config import get_settings
from splitbill.errors import BillFormatError
from splitbill.models.bill import BillInput, ValidationIssue, ValidationResult


DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# pydantic error types that mean "right type, wrong value"
_VALUE_ERROR_TYPES = {
    "greater_than_equal",
    "too_short",
    "literal_error",
}


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "bill"


def _issue_from_pydantic(error: dict) -> ValidationIssue:
    error_type = error.get("type", "")
    if error_type == "missing":
        issue_type = "missing"
    elif error_type in _VALUE_ERROR_TYPES:
        issue_type = "invalid_value"
    else:
        issue_type = "invalid_type"

    return ValidationIssue(
        field=_field_path(error.get("loc", ())),
        issue_type=issue_type,
        message=error.get("msg", "Invalid value"),
        severity="error",
    )


class BillInputValidator:
    """
    Validates raw bill documents through a two-stage pipeline.

    Stage 2 only runs if stage 1 produced a BillInput.
    """

    def __init__(self, max_tip_percentage_warning: Optional[float] = None):
        if max_tip_percentage_warning is None:
            max_tip_percentage_warning = (
                get_settings().processing.max_tip_percentage_warning
            )
        self._max_tip_warning = max_tip_percentage_warning

    def _validate_schema(
        self,
        raw: Any,
    ) -> tuple[Optional[BillInput], list[ValidationIssue]]:
        """
        Stage 1: Schema validation.

        Returns: (bill_or_none, list_of_issues)
        """
        if not isinstance(raw, dict):
            return None, [ValidationIssue(
                field="bill",
                issue_type="invalid_type",
                message=f"Bill must be a JSON object, got {type(raw).__name__}",
                severity="error",
            )]

        try:
            bill = BillInput.model_validate(raw)
        except ValidationError as e:
            return None, [_issue_from_pydantic(error) for error in e.errors()]

        return bill, []

    def _validate_semantic(
        self,
        bill: BillInput,
    ) -> tuple[bool, list[ValidationIssue]]:
        """
        Stage 2: Semantic validation.

        Returns: (is_valid, list_of_issues)
        """
        issues = []

        for index, item in enumerate(bill.items):
            if not item.is_shared and not item.person.strip():
                issues.append(ValidationIssue(
                    field=f"items.{index}.person",
                    issue_type="invalid_value",
                    message=f"Personal item '{item.name}' has a blank owner",
                    severity="error",
                ))

        if not DATE_PATTERN.match(bill.date):
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"Date '{bill.date}' is not in YYYY-MM-DD form",
                severity="warning",
            ))

        if not bill.personal_items:
            issues.append(ValidationIssue(
                field="items",
                issue_type="no_participants",
                message="No personal items; nobody to split the shared items between",
                severity="warning",
            ))

        if bill.tip_percentage > self._max_tip_warning:
            issues.append(ValidationIssue(
                field="tipPercentage",
                issue_type="suspicious_value",
                message=f"Tip percentage ({bill.tip_percentage}%) seems unusually high",
                severity="warning",
            ))

        is_valid = not any(issue.severity == "error" for issue in issues)
        return is_valid, issues

    def validate(self, raw: Any) -> ValidationResult:
        """
        Run the full two-stage validation pipeline.

        Args:
            raw: A decoded JSON document

        Returns:
            ValidationResult carrying the parsed bill when valid
        """
        bill, all_issues = self._validate_schema(raw)
        schema_valid = bill is not None

        semantic_valid = False
        if bill is not None:
            semantic_valid, semantic_issues = self._validate_semantic(bill)
            all_issues.extend(semantic_issues)

        is_valid = schema_valid and semantic_valid

        return ValidationResult(
            schema_valid=schema_valid,
            semantic_valid=semantic_valid,
            is_valid=is_valid,
            bill=bill if is_valid else None,
            issues=all_issues,
        )


def parse_bill_input(
    raw: Any,
    validator: Optional[BillInputValidator] = None,
) -> BillInput:
    """
    Build a trusted BillInput from a decoded JSON document.

    Raises:
        BillFormatError: listing every error-level issue
    """
    validator = validator or BillInputValidator()
    result = validator.validate(raw)
    if not result.is_valid:
        raise BillFormatError(
            f"Invalid bill: {result.error_count} error(s)",
            issues=result.issues,
        )
    return result.bill
