"""
Finance Scraper API - FastAPI Application
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.routers import finance

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="Finance Scraper API",
    description="REST API for dividend history and company names scraped from Yahoo Finance",
    version="0.1.0",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(finance.router, prefix="/api/v1", tags=["finance"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {"status": "ok", "service": "finance-scraper-api"}


@app.get("/health")
async def health():
    """Health check endpoint"""
    return {"status": "healthy"}
