"""
Bill Splitting Core

Pure functions that turn a validated BillInput into a BillOutput:

1. Aggregate   - subtotal of every item price
2. Tip         - subtotal x percentage, rounded to one decimal
3. Resolve     - distinct participants in first-appearance order
4. Allocate    - personal items + equal share of shared items + pro-rata tip
5. Reconcile   - push rounding drift onto the first participant so the
                 amounts add up to the grand total

IMPORTANT: Amounts are binary floats and every rounding goes through
round_to_tenth(), which rounds halves up (toward +inf). Python's built-in
round() uses banker's rounding and gives different results on .x5 values.

Nothing here raises for a validated bill and nothing here logs; the
orchestrator audits what happened.
"""

import math
import re
from typing import Optional, Sequence

from splitbill.models.bill import (
    BillInput,
    BillItem,
    BillOutput,
    PersonItem,
)


# Differences smaller than this are floating point noise, not drift.
RECONCILE_TOLERANCE = 0.0001

# Numeric text accepted in date parts
DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
INFINITY_PATTERN = re.compile(r"^[+-]?Infinity$")
RADIX_PATTERNS = (
    (re.compile(r"^0[xX]([0-9a-fA-F]+)$"), 16),
    (re.compile(r"^0[oO]([0-7]+)$"), 8),
    (re.compile(r"^0[bB]([01]+)$"), 2),
)


def round_to_tenth(value: float) -> float:
    """Round to the nearest 0.1, halves toward +inf."""
    return math.floor(value * 10 + 0.5) / 10


# =============================================================================
# DATE FORMATTING
# =============================================================================

def _parse_number(text: str) -> float:
    """
    Numeric value of a trimmed, non-empty date part.

    Accepts signed decimals with an optional exponent, signed "Infinity",
    and unsigned 0x/0o/0b integers. Anything else is NaN.
    """
    if DECIMAL_PATTERN.match(text):
        return float(text)
    if INFINITY_PATTERN.match(text):
        return -math.inf if text.startswith("-") else math.inf
    for pattern, base in RADIX_PATTERNS:
        match = pattern.match(text)
        if match:
            return float(int(match.group(1), base))
    return math.nan


def _number_text(part: Optional[str]) -> str:
    """Render a date part as a number without leading zeros, or 'NaN'."""
    if part is None:
        return "NaN"
    text = part.strip()
    if not text:
        return "0"
    value = _parse_number(text)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return repr(value)


def format_date(date: str) -> str:
    """
    Format a YYYY-MM-DD date for display.

    "2024-03-21" -> "2024年3月21日"

    Month and day lose their leading zeros; the year is kept as written.
    Malformed input is not rejected, unparseable parts come out as "NaN".
    """
    parts = date.split("-")
    year = parts[0]
    month = _number_text(parts[1] if len(parts) > 1 else None)
    day = _number_text(parts[2] if len(parts) > 2 else None)
    return f"{year}年{month}月{day}日"


# =============================================================================
# TOTALS
# =============================================================================

def calculate_subtotal(items: Sequence[BillItem]) -> float:
    """Sum of every item price, shared and personal, unrounded."""
    total = 0.0
    for item in items:
        total += item.price
    return total


def calculate_tip(sub_total: float, tip_percentage: float) -> float:
    """Tip on the subtotal, rounded to the nearest 0.1 (12.34 -> 12.3)."""
    raw = sub_total * tip_percentage / 100
    return round_to_tenth(raw)


# =============================================================================
# PER-PERSON ALLOCATION
# =============================================================================

def resolve_participants(items: Sequence[BillItem]) -> list[str]:
    """Distinct owners of personal items, in order of first appearance."""
    seen: dict[str, None] = {}
    for item in items:
        if not item.is_shared:
            seen.setdefault(item.person, None)
    return list(seen)


def calculate_person_amount(
    items: Sequence[BillItem],
    name: str,
    participant_count: int,
    total_sub: float,
    total_tip: float,
) -> float:
    """
    Amount owed by one participant, rounded to one decimal.

    The person pays for their own items, an equal share of the shared
    items, and the slice of the (already rounded) total tip that matches
    their share of the subtotal.

    participant_count must be positive; allocate_items never calls this
    for a bill without participants.
    """
    personal = 0.0
    shared_total = 0.0
    for item in items:
        if item.is_shared:
            shared_total += item.price
        elif item.person == name:
            personal += item.price

    share = shared_total / participant_count
    sub_total_for_person = personal + share

    if total_sub == 0:
        person_tip = 0.0
    else:
        person_tip = total_tip * (sub_total_for_person / total_sub)

    return round_to_tenth(sub_total_for_person + person_tip)


def allocate_items(
    items: Sequence[BillItem],
    total_sub: float,
    total_tip: float,
) -> list[PersonItem]:
    """
    Compute every participant's amount.

    Returns an empty list when the bill has no personal items: there is
    nobody to divide the shared items between.
    """
    names = resolve_participants(items)
    if not names:
        return []

    participant_count = len(names)
    return [
        PersonItem(
            name=name,
            amount=calculate_person_amount(
                items,
                name=name,
                participant_count=participant_count,
                total_sub=total_sub,
                total_tip=total_tip,
            ),
        )
        for name in names
    ]


# =============================================================================
# RECONCILIATION
# =============================================================================

def reconcile_amounts(total_amount: float, items: list[PersonItem]) -> float:
    """
    Make the per-person amounts add up to total_amount.

    The whole rounding difference goes to the first participant. This is
    deterministic but not proportional.

    Mutates items[0] in place and returns the difference applied
    (0.0 when the amounts already reconcile or there is nobody to adjust).
    """
    if not items:
        return 0.0

    current = round_to_tenth(sum(item.amount for item in items))
    target = round_to_tenth(total_amount)
    diff = round_to_tenth(target - current)
    if abs(diff) < RECONCILE_TOLERANCE:
        return 0.0

    first = items[0]
    first.amount = round_to_tenth(first.amount + diff)
    return diff


# =============================================================================
# ENTRY POINT
# =============================================================================

def split_bill_with_drift(bill: BillInput) -> tuple[BillOutput, float]:
    """Split a bill and also return the rounding drift given to the first person."""
    sub_total = calculate_subtotal(bill.items)
    tip = calculate_tip(sub_total, bill.tip_percentage)
    total_amount = sub_total + tip

    items = allocate_items(bill.items, total_sub=sub_total, total_tip=tip)
    drift = reconcile_amounts(total_amount, items)

    output = BillOutput(
        date=format_date(bill.date),
        location=bill.location,
        sub_total=sub_total,
        tip=tip,
        total_amount=total_amount,
        items=items,
    )
    return output, drift


def split_bill(bill: BillInput) -> BillOutput:
    """
    Split a validated bill between its participants.

    Never raises for a BillInput built by the validator. A bill with only
    shared items yields an output with an empty item list.
    """
    output, _ = split_bill_with_drift(bill)
    return output
