from datetime import date
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field


class Company(BaseModel):
    """公司識別 (ticker + display name)"""
    model_config = ConfigDict(frozen=True)
    
    ticker: str = Field(..., min_length=1)  # 股票代號
    name: Optional[str] = None              # 公司名稱 (None = 找不到)


class DividendEvent(BaseModel):
    """單筆股利事件"""
    model_config = ConfigDict(frozen=True)
    
    ex_date: date   # 除息日
    amount: str     # 原始金額字串 (不轉數值)


class ScrapeResult(BaseModel):
    """單一 ticker 的爬取結果"""
    model_config = ConfigDict(frozen=True)
    
    company: Company
    dividends: List[DividendEvent] = []  # 依頁面順序 (新到舊)


class BatchScrapeResponse(BaseModel):
    """多 ticker 爬取回應"""
    count: int
    results: List[ScrapeResult]
    failed: List[str] = []
