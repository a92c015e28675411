"""
Company name extraction from the quote summary page

Strategies run in order and the first non-empty name wins:
1. <h1> containing "(TICKER)", e.g. "Apple Inc. (AAPL)"
2. <title>, e.g. "Apple Inc. (AAPL) Stock Price, News, Quote" or
   "AAPL Stock Price | Yahoo Finance"
"""
import logging
from typing import Callable, List, Optional

from bs4 import BeautifulSoup

from app.config import settings
from app.schemas.finance import Company

logger = logging.getLogger(__name__)

NameStrategy = Callable[[str, BeautifulSoup], Optional[str]]


class CompanyNameExtractor:
    """公司名稱解析器 (h1 -> title fallback)"""
    
    def __init__(self, site_suffix: Optional[str] = None):
        self.site_suffix = settings.title_site_suffix if site_suffix is None else site_suffix
        self.strategies: List[NameStrategy] = [
            self._name_from_headings,
            self._name_from_title,
        ]
    
    def extract(self, ticker: str, document: BeautifulSoup) -> Company:
        """
        解析公司名稱
        
        Returns:
            Company，找不到名稱時 name 為 None
        """
        for strategy in self.strategies:
            name = strategy(ticker, document)
            if name:
                return Company(ticker=ticker, name=name)
        
        logger.warning(f"Could not find company name for {ticker} in h1 or title")
        return Company(ticker=ticker, name=None)
    
    def _name_from_headings(self, ticker: str, document: BeautifulSoup) -> Optional[str]:
        """First <h1> containing "(ticker)" wins"""
        marker = f"({ticker})"
        
        for h1 in document.find_all("h1"):
            # No separator between text nodes: "Apple Inc. (<span>AAPL</span>)"
            text = " ".join(h1.get_text().split())
            if marker not in text:
                continue
            
            paren = text.rfind("(")
            name = text[:paren].strip() if paren != -1 else text
            logger.info(f"Found company name in h1 tag: {name}")
            return name
        
        logger.info(f"No h1 tag contains {marker}, falling back to title")
        return None
    
    def _name_from_title(self, ticker: str, document: BeautifulSoup) -> Optional[str]:
        """Name from <title>, before "(" or with the site suffix removed"""
        title = document.title.get_text().strip() if document.title else ""
        if not title:
            logger.info(f"No title tag for {ticker}")
            return None
        
        open_paren = title.find("(")
        close_paren = title.find(")")
        if open_paren != -1 and close_paren > open_paren:
            name = title[:open_paren].strip()
        else:
            name = title.replace(self.site_suffix, "").strip() if self.site_suffix else title
        
        logger.info(f"Fallback: extracted company name from title tag: {name}")
        return name
