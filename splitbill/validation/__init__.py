"""Bill input validation package."""

from splitbill.validation.validator import BillInputValidator, parse_bill_input

__all__ = ["BillInputValidator", "parse_bill_input"]
