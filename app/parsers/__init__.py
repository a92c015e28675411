"""
HTML Parsers Package

Yahoo Finance 頁面解析工具
"""
# Dividend history table
from app.parsers.dividend_history import (
    DividendExtractor,
    HISTORY_TABLE_MARKER,
)

# Quote summary page
from app.parsers.company_name import CompanyNameExtractor

__all__ = [
    "DividendExtractor",
    "HISTORY_TABLE_MARKER",
    "CompanyNameExtractor",
]
