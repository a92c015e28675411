"""
Finance HTML Client
Fetches Yahoo Finance pages and returns parsed documents

The client only does transport: it never interprets page content.
Extraction lives in app.parsers.

Key Features:
- Browser-like default headers (some pages block bare clients)
- Bounded timeout per request (default 10s)
- BeautifulSoup + lxml parsing
"""
import asyncio
import logging
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from app.config import settings

logger = logging.getLogger(__name__)


class FinanceHTMLClientError(Exception):
    """Finance HTML Client Error (base class)"""
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class FinanceTimeoutError(FinanceHTMLClientError):
    """Raised when the page does not respond within the timeout"""
    pass


class FinanceDataNotFoundError(FinanceHTMLClientError):
    """Raised when the requested page doesn't exist"""
    pass


class FinanceHTMLClient:
    """
    Yahoo Finance HTML 客戶端
    
    Features:
    - 預設瀏覽器 headers
    - 逾時控制 (預設 10 秒)
    - BeautifulSoup 解析
    """
    
    BASE_URL = "https://finance.yahoo.com"
    
    def __init__(
        self,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        parser: Optional[str] = None,
    ):
        """
        Initialize Finance HTML Client
        
        Args:
            timeout: Seconds to wait for a response (default: settings.request_timeout)
            max_retries: Attempts on timeout (default: settings.max_retries)
            parser: BeautifulSoup tree builder (default: settings.html_parser)
        """
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.max_retries = max(1, max_retries if max_retries is not None else settings.max_retries)
        self.parser = parser or settings.html_parser
    
    def _get_headers(self, extra: Optional[dict] = None) -> dict:
        """Get request headers, with per-call overrides"""
        headers = {
            "User-Agent": settings.user_agent,
            "Accept-Language": settings.accept_language,
            "Connection": "keep-alive",
        }
        if extra:
            headers.update(extra)
        return headers
    
    async def fetch_document(
        self,
        url: str,
        headers: Optional[dict] = None,
        timeout: Optional[float] = None,
    ) -> BeautifulSoup:
        """
        抓取頁面並解析為 BeautifulSoup
        
        Args:
            url: 完整的 URL
            headers: 額外的 request headers
            timeout: 本次請求逾時秒數 (預設 self.timeout)
        
        Returns:
            解析後的 BeautifulSoup document
        
        Raises:
            FinanceDataNotFoundError: HTTP 404
            FinanceTimeoutError: 逾時
            FinanceHTMLClientError: 其他請求失敗
        """
        request_timeout = timeout if timeout is not None else self.timeout
        
        for attempt in range(self.max_retries):
            try:
                async with httpx.AsyncClient(
                    timeout=request_timeout,
                    follow_redirects=True,
                ) as client:
                    resp = await client.get(url, headers=self._get_headers(headers))
                    
                    if resp.status_code == 404:
                        raise FinanceDataNotFoundError(f"Page not found: {url}", 404)
                    
                    if resp.status_code != 200:
                        raise FinanceHTMLClientError(
                            f"HTTP {resp.status_code}",
                            resp.status_code
                        )
                    
                    logger.debug(f"Fetched {len(resp.text)} chars from {url}")
                    return BeautifulSoup(resp.text, self.parser)
                    
            except httpx.TimeoutException:
                logger.warning(f"Timeout attempt {attempt + 1}/{self.max_retries} for {url}")
                if attempt == self.max_retries - 1:
                    raise FinanceTimeoutError(f"Request timeout after {request_timeout}s: {url}")
                await asyncio.sleep(1 * (attempt + 1))
                
            except httpx.HTTPError as e:
                raise FinanceHTMLClientError(f"HTTP error: {e}")
        
        raise FinanceHTMLClientError(f"Failed to fetch {url}")


# Singleton instance
_finance_html_client: Optional[FinanceHTMLClient] = None


def get_finance_html_client() -> FinanceHTMLClient:
    """Get Finance HTML client instance (singleton)"""
    global _finance_html_client
    if _finance_html_client is None:
        _finance_html_client = FinanceHTMLClient()
    return _finance_html_client
