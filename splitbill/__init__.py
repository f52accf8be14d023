"""
Bill Splitter - Source Package

Splits a shared restaurant bill between the people at the table:
shared items evenly, personal items to their owner, tip in proportion,
with amounts rounded to 0.1 and reconciled to the grand total.

DESIGN PRINCIPLES:
1. The splitting core is pure and never raises for a validated bill
2. Untrusted JSON only enters through the validator
3. Fail visibly at the file layer, one exit status per error kind
4. Every file processed is audited
"""

__version__ = "1.0.0"

from splitbill.splitting import calculate_tip, format_date, split_bill  # noqa: E402

__all__ = ["calculate_tip", "format_date", "split_bill"]
