"""Utility modules for finance-scraper-api"""
from app.utils.numerics import parse_integer_token, tokenize_row_text
from app.utils.dates import MONTHS, UNKNOWN_MONTH, month_to_number

__all__ = [
    "parse_integer_token",
    "tokenize_row_text",
    "MONTHS",
    "UNKNOWN_MONTH",
    "month_to_number",
]
