"""
Finance Scraper Service - 股利與公司名稱爬取服務

Fetches Yahoo Finance pages and runs the extractors over them.

Pages:
- /quote/{ticker}/history?...&filter=div : 股利歷史
- /quote/{ticker}                        : 公司摘要 (名稱)
"""
import asyncio
import logging
import time
from typing import Iterable, Optional

from app.config import settings
from app.parsers.company_name import CompanyNameExtractor
from app.parsers.dividend_history import DividendExtractor
from app.schemas.finance import BatchScrapeResponse, Company, ScrapeResult
from app.services.finance_html_client import (
    get_finance_html_client,
    FinanceHTMLClient,
    FinanceHTMLClientError,
    FinanceDataNotFoundError,
)

logger = logging.getLogger(__name__)

SECONDS_PER_YEAR = 365 * 24 * 60 * 60


class FinanceScraperError(Exception):
    """Finance Scraper Error"""
    pass


class FinanceScraperService:
    """
    Yahoo Finance 爬取服務
    
    Extractors are stateless, so one service instance can serve
    concurrent scrapes for any number of tickers.
    """
    
    HISTORY_URL = (
        "https://finance.yahoo.com/quote/{ticker}/history"
        "?period1={start}&period2={end}&interval=1d&filter=div"
    )
    SUMMARY_URL = "https://finance.yahoo.com/quote/{ticker}"
    
    def __init__(
        self,
        html_client: Optional[FinanceHTMLClient] = None,
        dividend_extractor: Optional[DividendExtractor] = None,
        name_extractor: Optional[CompanyNameExtractor] = None,
    ):
        self.client = html_client or get_finance_html_client()
        self.dividend_extractor = dividend_extractor or DividendExtractor()
        self.name_extractor = name_extractor or CompanyNameExtractor()
    
    def build_history_url(self, ticker: str, now: Optional[int] = None) -> str:
        """History URL covering the last `history_years` years"""
        end = int(time.time()) if now is None else now
        start = end - settings.history_years * SECONDS_PER_YEAR
        return self.HISTORY_URL.format(ticker=ticker, start=start, end=end)
    
    def build_summary_url(self, ticker: str) -> str:
        return self.SUMMARY_URL.format(ticker=ticker)
    
    async def scrape_dividends(
        self,
        ticker: str,
        company: Optional[Company] = None,
    ) -> ScrapeResult:
        """
        爬取股利歷史
        
        Args:
            ticker: 股票代號
            company: 已知的公司資訊 (預設只有 ticker)
        
        Returns:
            ScrapeResult (dividends 可能為空)
        
        Raises:
            FinanceScraperError: 無法取得頁面
        """
        url = self.build_history_url(ticker)
        logger.info(f"Attempting to scrape dividend URL: {url}")
        
        try:
            document = await self.client.fetch_document(url)
        except FinanceHTMLClientError as e:
            raise FinanceScraperError(f"Failed to fetch dividend history for {ticker}: {e.message}")
        
        dividends = self.dividend_extractor.extract(ticker, document)
        
        return ScrapeResult(
            company=company or Company(ticker=ticker),
            dividends=dividends,
        )
    
    async def scrape_company(self, ticker: str) -> Optional[Company]:
        """
        爬取公司名稱
        
        Returns:
            Company (name 可能為 None)，摘要頁不存在時回傳 None
        
        Raises:
            FinanceScraperError: 無法取得頁面
        """
        url = self.build_summary_url(ticker)
        logger.info(f"Attempting to scrape company summary URL: {url}")
        
        try:
            document = await self.client.fetch_document(url)
        except FinanceDataNotFoundError:
            logger.warning(f"No summary page for {ticker}")
            return None
        except FinanceHTMLClientError as e:
            raise FinanceScraperError(f"Failed to fetch company summary for {ticker}: {e.message}")
        
        return self.name_extractor.extract(ticker, document)
    
    async def scrape(self, ticker: str) -> ScrapeResult:
        """
        爬取公司名稱與股利歷史並合併
        
        兩個頁面同時抓取；摘要頁不存在時 company.name 為 None
        """
        company, result = await asyncio.gather(
            self.scrape_company(ticker),
            self.scrape_dividends(ticker),
        )
        
        return ScrapeResult(
            company=company or Company(ticker=ticker),
            dividends=result.dividends,
        )
    
    async def scrape_many(
        self,
        tickers: Iterable[str],
        concurrency: Optional[int] = None,
    ) -> BatchScrapeResponse:
        """
        批次爬取多個 ticker
        
        單一 ticker 失敗只會記錄在 failed，不影響其他 ticker
        """
        semaphore = asyncio.Semaphore(concurrency or settings.batch_concurrency)
        ticker_list = list(tickers)
        
        async def _scrape_one(ticker: str) -> Optional[ScrapeResult]:
            async with semaphore:
                try:
                    return await self.scrape(ticker)
                except FinanceScraperError as e:
                    logger.error(f"Scrape failed for {ticker}: {e}")
                    return None
        
        outcomes = await asyncio.gather(*(_scrape_one(t) for t in ticker_list))
        
        results = [r for r in outcomes if r is not None]
        failed = [t for t, r in zip(ticker_list, outcomes) if r is None]
        
        logger.info(f"Batch scrape: {len(results)} succeeded, {len(failed)} failed")
        
        return BatchScrapeResponse(
            count=len(results),
            results=results,
            failed=failed,
        )


# Singleton instance
_scraper_service: Optional[FinanceScraperService] = None


def get_scraper_service() -> FinanceScraperService:
    """Get scraper service instance (singleton)"""
    global _scraper_service
    if _scraper_service is None:
        _scraper_service = FinanceScraperService()
    return _scraper_service
