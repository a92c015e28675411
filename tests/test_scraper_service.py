"""
Tests for Finance Scraper Service
"""
from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest
from bs4 import BeautifulSoup

from app.services.scraper import (
    FinanceScraperService,
    FinanceScraperError,
    get_scraper_service,
)
from app.services.finance_html_client import (
    FinanceDataNotFoundError,
    FinanceHTMLClientError,
    FinanceTimeoutError,
)
from app.schemas.finance import (
    BatchScrapeResponse,
    Company,
    DividendEvent,
    ScrapeResult,
)


HISTORY_HTML = """
<html><body>
<div data-testid="history-table"><table><tbody>
    <tr><td>Feb 9, 2024</td><td>0.24 Dividend</td></tr>
    <tr><td>Aug 28, 2020</td><td>4:1 Stock Splits</td></tr>
    <tr><td>Nov 10, 2023</td><td>0.24 Dividend</td></tr>
</tbody></table></div>
</body></html>
"""

SUMMARY_HTML = """
<html><head><title>Apple Inc. (AAPL) Stock Price | Yahoo Finance</title></head>
<body><h1>Apple Inc. (AAPL)</h1></body></html>
"""


def make_client(pages: dict):
    """Fake client serving pages by URL path; values may be exceptions"""
    async def fetch_document(url, headers=None, timeout=None):
        key = "history" if "/history" in url else "summary"
        page = pages[key]
        if isinstance(page, Exception):
            raise page
        return BeautifulSoup(page, "lxml")
    
    client = MagicMock()
    client.fetch_document = AsyncMock(side_effect=fetch_document)
    return client


class TestFinanceScraperServiceInit:
    """Test FinanceScraperService initialization"""
    
    def test_default_initialization(self):
        """Test default initialization"""
        service = FinanceScraperService()
        assert service.client is not None
        assert service.dividend_extractor is not None
        assert service.name_extractor is not None
    
    def test_singleton_returns_same_instance(self):
        """Test singleton pattern"""
        service1 = get_scraper_service()
        service2 = get_scraper_service()
        assert service1 is service2


class TestURLConstruction:
    """Test URL construction"""
    
    def test_history_url_covers_ten_years(self):
        """Test history URL window and dividend filter"""
        service = FinanceScraperService(html_client=MagicMock())
        now = 1_700_000_000
        
        url = service.build_history_url("AAPL", now=now)
        
        start = now - 10 * 365 * 24 * 60 * 60
        assert url == (
            "https://finance.yahoo.com/quote/AAPL/history"
            f"?period1={start}&period2={now}&interval=1d&filter=div"
        )
    
    def test_summary_url(self):
        """Test summary URL"""
        service = FinanceScraperService(html_client=MagicMock())
        assert service.build_summary_url("KO") == "https://finance.yahoo.com/quote/KO"


class TestScrapeDividends:
    """Test scrape_dividends"""
    
    @pytest.mark.asyncio
    async def test_dividends_in_page_order(self):
        """Test dividend rows are extracted in document order"""
        service = FinanceScraperService(html_client=make_client({"history": HISTORY_HTML}))
        
        result = await service.scrape_dividends("AAPL")
        
        assert result.company == Company(ticker="AAPL")
        assert result.dividends == [
            DividendEvent(ex_date=date(2024, 2, 9), amount="0.24"),
            DividendEvent(ex_date=date(2023, 11, 10), amount="0.24"),
        ]
    
    @pytest.mark.asyncio
    async def test_known_company_is_kept(self):
        """Test a caller-supplied company is attached"""
        service = FinanceScraperService(html_client=make_client({"history": HISTORY_HTML}))
        company = Company(ticker="AAPL", name="Apple Inc.")
        
        result = await service.scrape_dividends("AAPL", company)
        
        assert result.company == company
    
    @pytest.mark.asyncio
    async def test_missing_table_gives_empty_result(self):
        """Test structural absence is not an error"""
        service = FinanceScraperService(html_client=make_client({"history": "<html></html>"}))
        
        result = await service.scrape_dividends("AAPL")
        
        assert result.dividends == []
    
    @pytest.mark.asyncio
    async def test_transport_fault_raises(self):
        """Test fetch failure fails the whole ticker"""
        service = FinanceScraperService(
            html_client=make_client({"history": FinanceTimeoutError("timeout")})
        )
        
        with pytest.raises(FinanceScraperError):
            await service.scrape_dividends("AAPL")


class TestScrapeCompany:
    """Test scrape_company"""
    
    @pytest.mark.asyncio
    async def test_company_name(self):
        """Test name from h1"""
        service = FinanceScraperService(html_client=make_client({"summary": SUMMARY_HTML}))
        
        company = await service.scrape_company("AAPL")
        
        assert company == Company(ticker="AAPL", name="Apple Inc.")
    
    @pytest.mark.asyncio
    async def test_missing_page_returns_none(self):
        """Test 404 summary page gives no company"""
        service = FinanceScraperService(
            html_client=make_client({"summary": FinanceDataNotFoundError("nope", 404)})
        )
        
        assert await service.scrape_company("NOPE") is None
    
    @pytest.mark.asyncio
    async def test_transport_fault_raises(self):
        """Test other fetch failures propagate"""
        service = FinanceScraperService(
            html_client=make_client({"summary": FinanceHTMLClientError("HTTP 503", 503)})
        )
        
        with pytest.raises(FinanceScraperError):
            await service.scrape_company("AAPL")


class TestScrape:
    """Test combined scrape"""
    
    @pytest.mark.asyncio
    async def test_combines_company_and_dividends(self):
        """Test both pages are composed into one result"""
        service = FinanceScraperService(
            html_client=make_client({"history": HISTORY_HTML, "summary": SUMMARY_HTML})
        )
        
        result = await service.scrape("AAPL")
        
        assert isinstance(result, ScrapeResult)
        assert result.company.name == "Apple Inc."
        assert len(result.dividends) == 2
    
    @pytest.mark.asyncio
    async def test_missing_summary_keeps_ticker(self):
        """Test absent summary page still returns dividends"""
        service = FinanceScraperService(
            html_client=make_client({
                "history": HISTORY_HTML,
                "summary": FinanceDataNotFoundError("nope", 404),
            })
        )
        
        result = await service.scrape("AAPL")
        
        assert result.company == Company(ticker="AAPL", name=None)
        assert len(result.dividends) == 2
    
    @pytest.mark.asyncio
    async def test_idempotent(self):
        """Test repeated scrapes of identical pages agree"""
        service = FinanceScraperService(
            html_client=make_client({"history": HISTORY_HTML, "summary": SUMMARY_HTML})
        )
        
        assert await service.scrape("AAPL") == await service.scrape("AAPL")


class TestScrapeMany:
    """Test batch scraping"""
    
    @pytest.mark.asyncio
    async def test_failures_do_not_abort_siblings(self):
        """Test a failing ticker is reported and others succeed"""
        async def fetch_document(url, headers=None, timeout=None):
            if "/BAD" in url:
                raise FinanceTimeoutError("timeout")
            page = HISTORY_HTML if "/history" in url else SUMMARY_HTML
            return BeautifulSoup(page, "lxml")
        
        client = MagicMock()
        client.fetch_document = AsyncMock(side_effect=fetch_document)
        service = FinanceScraperService(html_client=client)
        
        response = await service.scrape_many(["AAPL", "BAD", "MSFT"], concurrency=2)
        
        assert isinstance(response, BatchScrapeResponse)
        assert response.count == 2
        assert [r.company.ticker for r in response.results] == ["AAPL", "MSFT"]
        assert response.failed == ["BAD"]
    
    @pytest.mark.asyncio
    async def test_empty_batch(self):
        """Test empty ticker list"""
        service = FinanceScraperService(html_client=make_client({}))
        
        response = await service.scrape_many([])
        
        assert response.count == 0
        assert response.results == []
        assert response.failed == []


class TestSchemas:
    """Test value object behavior"""
    
    def test_company_is_frozen(self):
        """Test Company cannot be modified"""
        company = Company(ticker="AAPL", name="Apple Inc.")
        with pytest.raises(Exception):
            company.name = "Other"
    
    def test_empty_ticker_rejected(self):
        """Test ticker must be non-empty"""
        with pytest.raises(Exception):
            Company(ticker="")
    
    def test_dividend_event_serialization(self):
        """Test event JSON keeps the raw amount"""
        event = DividendEvent(ex_date=date(2023, 2, 15), amount="0.24")
        assert event.model_dump(mode="json") == {"ex_date": "2023-02-15", "amount": "0.24"}
