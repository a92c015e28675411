#!/usr/bin/env python
"""
手動測試 FinanceScraperService (連線至 Yahoo Finance)

使用方式:
  FINANCE_REQUEST_TIMEOUT=15 python scripts/scrape_tickers.py AAPL MSFT KO
"""
import asyncio
import logging
import sys

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main(tickers):
    from app.services.scraper import get_scraper_service
    
    service = get_scraper_service()
    
    logger.info(f"=== Scraping {len(tickers)} tickers ===")
    batch = await service.scrape_many(tickers)
    
    for result in batch.results:
        logger.info(f"{result.company.ticker}: {result.company.name} ({len(result.dividends)} dividends)")
        for event in result.dividends[:3]:
            logger.info(f"  {event.ex_date} {event.amount}")
    
    if batch.failed:
        logger.warning(f"Failed: {', '.join(batch.failed)}")
    
    logger.info("\n=== Done ===")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:] or ["AAPL"]))
