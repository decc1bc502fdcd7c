"""
Storefront - Main FastAPI Application

Single entry point for the product and cart page endpoints.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.config import ALLOWED_ORIGINS
from storefront.logging import get_logger
from storefront.routers import webapp_router

logger = get_logger(__name__)


# ==================== FASTAPI APP ====================

app = FastAPI(
    title="Storefront",
    description="Marketplace storefront cart API",
    version="1.0.0",
)

# The cart session travels in a cookie, so origins must be explicit
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(webapp_router)


# ==================== HEALTH CHECK ====================

@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok", "service": "storefront"}
