from fastapi import FastAPI

from src.web.routers.activity import router as activity_router
from src.web.routers.auth import router as auth_router
from src.web.routers.companies import router as companies_router
from src.web.routers.comparison import router as comparison_router
from src.web.routers.contact import router as contact_router
from src.web.routers.market import router as market_router
from src.web.routers.search import router as search_router
from src.web.routers.storage import router as storage_router
from src.web.routers.watchlists import router as watchlists_router

def register_routers(app: FastAPI):
    """Register all routers with the application."""
    app.include_router(auth_router)
    app.include_router(search_router)
    app.include_router(companies_router)
    app.include_router(comparison_router)
    app.include_router(market_router)
    app.include_router(watchlists_router)
    app.include_router(activity_router)
    app.include_router(storage_router)
    app.include_router(contact_router)
