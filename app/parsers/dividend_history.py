"""
Dividend history table parsing

Extracts dividend events from the Yahoo Finance history page
(`/quote/{ticker}/history?...&filter=div`).

Table layout (one <tr> per event, newest first):
    <div data-testid="history-table">
      <table><tbody>
        <tr><td>Feb 15, 2023</td><td>0.24 Dividend</td></tr>
        <tr><td>Aug 28, 2020</td><td>4:1 Stock Splits</td></tr>
      </tbody></table>
    </div>

Each row is parsed independently; a malformed row is skipped and logged,
it never aborts the rest of the table.
"""
import logging
from datetime import date
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from app.schemas.finance import DividendEvent
from app.utils.dates import UNKNOWN_MONTH, month_to_number
from app.utils.numerics import parse_integer_token, tokenize_row_text

logger = logging.getLogger(__name__)

HISTORY_TABLE_ATTR = "data-testid"
HISTORY_TABLE_MARKER = "history-table"
DIVIDEND_ROW_SUFFIX = "Dividend"

# [month, day, year, amount, ...]
MIN_ROW_TOKENS = 4


class DividendExtractor:
    """
    股利歷史表格解析器
    
    Stateless: the same document always yields the same sequence.
    """
    
    def extract(self, ticker: str, document: BeautifulSoup) -> List[DividendEvent]:
        """
        解析歷史頁面中的股利事件
        
        Args:
            ticker: 股票代號 (僅用於 log)
            document: 已解析的歷史頁面
        
        Returns:
            DividendEvent 列表 (頁面順序)，找不到表格時回傳空列表
        """
        table = document.find(attrs={HISTORY_TABLE_ATTR: HISTORY_TABLE_MARKER})
        if table is None:
            logger.warning(f"No history table found for {ticker}")
            return []
        
        tbody = self._find_body(table)
        if tbody is None:
            logger.warning(f"History table for {ticker} has no tbody")
            return []
        
        dividends = []
        skipped = 0
        
        for row in tbody.find_all("tr", recursive=False):
            text = self._row_text(row)
            
            # Splits and "no data" placeholders
            if not text.endswith(DIVIDEND_ROW_SUFFIX):
                continue
            
            try:
                event = self._parse_row(text)
            except Exception as e:
                logger.warning(f"Unexpected error parsing dividend row '{text}': {e}")
                event = None
            
            if event is None:
                skipped += 1
                continue
            
            dividends.append(event)
        
        if skipped > 0:
            logger.warning(f"Skipped {skipped} malformed dividend rows for {ticker}")
        
        logger.info(f"Extracted {len(dividends)} dividends for {ticker}")
        return dividends
    
    def _find_body(self, table: Tag) -> Optional[Tag]:
        """<tbody>, or the <table> itself when the body is left implied"""
        tbody = table.find("tbody")
        if tbody is not None:
            return tbody
        
        # lxml does not insert the implied <tbody> for <tr> directly under <table>
        inner = table if table.name == "table" else table.find("table")
        if inner is not None and inner.find("tr", recursive=False) is not None:
            return inner
        return None
    
    def _row_text(self, row: Tag) -> str:
        """
        Flatten a row to single-space separated cell text
        
        Separators go between cells only, so inline markup inside a cell
        (e.g. "$<span>0.24</span>") stays one token.
        """
        cells = row.find_all(["td", "th"], recursive=False) or [row]
        texts = (" ".join(cell.get_text().split()) for cell in cells)
        return " ".join(text for text in texts if text)
    
    def _parse_row(self, text: str) -> Optional[DividendEvent]:
        """解析單列文字，無法解析時回傳 None"""
        tokens = tokenize_row_text(text)
        if len(tokens) < MIN_ROW_TOKENS:
            logger.warning(f"Skipping malformed row: {text}")
            return None
        
        month_name, day_token, year_token, amount = tokens[:MIN_ROW_TOKENS]
        
        month = month_to_number(month_name)
        if month == UNKNOWN_MONTH:
            logger.warning(f"Unknown month '{month_name}' in row: {text}")
            return None
        
        try:
            day = parse_integer_token(day_token)
            year = parse_integer_token(year_token)
            ex_date = date(year, month, day)
        except ValueError as e:
            logger.warning(f"Error parsing date for row '{text}': {e}")
            return None
        
        return DividendEvent(ex_date=ex_date, amount=amount)
