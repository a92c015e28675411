"""
Finance Router - 股利與公司資訊 API

Dividend history and company name endpoints backed by Yahoo Finance pages.
"""
import logging
from urllib.parse import unquote

from fastapi import APIRouter, Query, HTTPException

from app.services.scraper import (
    get_scraper_service,
    FinanceScraperError,
)
from app.schemas.finance import (
    BatchScrapeResponse,
    Company,
    ScrapeResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/finance", tags=["Finance - 股利"])


@router.get(
    "/dividend/{company_name}",
    response_model=ScrapeResult,
    summary="取得股利歷史",
    description="取得指定 ticker 的公司名稱與近十年股利歷史 (依頁面順序，新到舊)。"
)
async def get_dividends(company_name: str):
    """
    取得股利歷史
    
    ## 回傳欄位
    - `company`: ticker 與公司名稱 (找不到名稱時為 null)
    - `dividends`: `ex_date` 除息日, `amount` 原始金額字串
    """
    ticker = unquote(company_name)
    logger.info(f"Requested company: {ticker}")
    
    service = get_scraper_service()
    
    try:
        return await service.scrape(ticker)
    
    except FinanceScraperError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get(
    "/company/{ticker}",
    response_model=Company,
    summary="取得公司名稱",
    description="從摘要頁解析公司名稱 (h1 優先，title 備援)。"
)
async def get_company(ticker: str):
    service = get_scraper_service()
    
    try:
        company = await service.scrape_company(unquote(ticker))
    except FinanceScraperError as e:
        raise HTTPException(status_code=502, detail=str(e))
    
    if company is None:
        raise HTTPException(status_code=404, detail=f"No summary page for {ticker}")
    return company


@router.get(
    "/dividends",
    response_model=BatchScrapeResponse,
    summary="批次取得股利歷史",
    description="以逗號分隔多個 ticker，單一 ticker 失敗會列在 `failed`。"
)
async def get_dividends_batch(
    tickers: str = Query(..., min_length=1, description="逗號分隔的 ticker (e.g., AAPL,MSFT)"),
):
    ticker_list = [t.strip() for t in tickers.split(",") if t.strip()]
    if not ticker_list:
        raise HTTPException(status_code=422, detail="No tickers given")
    
    service = get_scraper_service()
    return await service.scrape_many(ticker_list)
