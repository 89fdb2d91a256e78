"""Utility functions for finchat."""

from finchat.utils.date_parser import parse_date, add_months, current_month_range
from finchat.utils.amount_parser import parse_amount, parse_command_amount, format_brl

__all__ = [
    "parse_date",
    "add_months",
    "current_month_range",
    "parse_amount",
    "parse_command_amount",
    "format_brl",
]
