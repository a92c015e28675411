"""
Configuration settings for Finance Scraper API
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""
    
    # Request settings
    request_timeout: float = 10.0
    max_retries: int = 1
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/115.0.0.0 Safari/537.36"
    )
    accept_language: str = "en-US,en;q=0.9"
    html_parser: str = "lxml"
    
    # Scraping settings
    history_years: int = 10
    title_site_suffix: str = " | Yahoo Finance"
    batch_concurrency: int = 4
    
    log_level: str = "INFO"
    
    class Config:
        env_prefix = "FINANCE_"


settings = Settings()
