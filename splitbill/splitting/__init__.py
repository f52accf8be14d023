"""Bill splitting core."""

from splitbill.splitting.calculator import (
    RECONCILE_TOLERANCE,
    allocate_items,
    calculate_person_amount,
    calculate_subtotal,
    calculate_tip,
    format_date,
    reconcile_amounts,
    resolve_participants,
    round_to_tenth,
    split_bill,
    split_bill_with_drift,
)

__all__ = [
    "RECONCILE_TOLERANCE",
    "allocate_items",
    "calculate_person_amount",
    "calculate_subtotal",
    "calculate_tip",
    "format_date",
    "reconcile_amounts",
    "resolve_participants",
    "round_to_tenth",
    "split_bill",
    "split_bill_with_drift",
]
