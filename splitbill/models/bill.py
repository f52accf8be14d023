"""
Core Data Models for Bill Splitter

These models define the schemas for everything flowing into and out of
the splitting core:
1. BillInput - a restaurant bill as read from JSON
2. BillOutput - the split result written back to JSON
3. ValidationIssue / ValidationResult - what the validator reports

DESIGN DECISION: Python attributes are snake_case, the JSON wire format is
camelCase. Every wire field carries an alias; models accept either name on
input and are dumped with by_alias=True.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# INPUT MODELS
# =============================================================================

class SharedBillItem(BaseModel):
    """
    A line item shared by the whole table.

    Its price is divided evenly across every distinct participant.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(
        ...,
        description="Item name as printed on the bill"
    )
    price: float = Field(
        ...,
        ge=0,
        strict=True,
        description="Item price"
    )
    is_shared: Literal[True] = Field(
        default=True,
        alias="isShared",
    )


class PersonalBillItem(BaseModel):
    """
    A line item ordered by one participant.

    Its full price is attributed to `person`.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str = Field(
        ...,
        description="Item name as printed on the bill"
    )
    price: float = Field(
        ...,
        ge=0,
        strict=True,
        description="Item price"
    )
    is_shared: Literal[False] = Field(
        default=False,
        alias="isShared",
    )
    person: str = Field(
        ...,
        description="Participant who owns this item"
    )


BillItem = Annotated[
    Union[SharedBillItem, PersonalBillItem],
    Field(discriminator="is_shared"),
]


class BillInput(BaseModel):
    """
    A restaurant bill to be split.

    CRITICAL: Only construct this from untrusted data through
    splitbill.validation.parse_bill_input. The splitting core trusts it.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    date: str = Field(
        ...,
        description="Bill date, YYYY-MM-DD"
    )
    location: str = Field(
        ...,
        description="Restaurant name or address"
    )
    tip_percentage: float = Field(
        ...,
        ge=0,
        strict=True,
        alias="tipPercentage",
        description="Tip as a percentage of the subtotal"
    )
    items: list[BillItem] = Field(
        ...,
        min_length=1,
        description="Line items in bill order"
    )

    @property
    def shared_items(self) -> list[SharedBillItem]:
        return [item for item in self.items if item.is_shared]

    @property
    def personal_items(self) -> list[PersonalBillItem]:
        return [item for item in self.items if not item.is_shared]


# =============================================================================
# OUTPUT MODELS
# =============================================================================

class PersonItem(BaseModel):
    """
    One participant's final amount.

    Not frozen: reconciliation adjusts the first participant's amount
    in place.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str
    amount: float


class BillOutput(BaseModel):
    """Result of splitting a bill."""
    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(
        ...,
        description="Localized display date, e.g. 2024年3月21日"
    )
    location: str
    sub_total: float = Field(
        ...,
        alias="subTotal",
        description="Sum of all item prices, unrounded"
    )
    tip: float = Field(
        ...,
        description="Tip rounded to one decimal"
    )
    total_amount: float = Field(
        ...,
        alias="totalAmount",
        description="Subtotal plus tip"
    )
    items: list[PersonItem] = Field(
        default_factory=list,
        description="Per-person amounts in first-appearance order"
    )

    @property
    def has_participants(self) -> bool:
        """False when the bill had no personal items and nothing was allocated."""
        return bool(self.items)

    def to_json_dict(self) -> dict:
        """Dump using the camelCase wire names."""
        return self.model_dump(by_alias=True)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Dotted path of the offending field (e.g. 'items.2.person')"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_type', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of the two-stage validation.

    Stage 1: Schema validation (types, required fields)
    Stage 2: Semantic validation (logic checks)
    """

    schema_valid: bool = Field(
        ...,
        description="Did schema validation pass?"
    )
    semantic_valid: bool = Field(
        ...,
        description="Did semantic validation pass?"
    )
    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    bill: Optional[BillInput] = Field(
        default=None,
        description="The parsed bill, present only when is_valid"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    @property
    def errors(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "error"]

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
