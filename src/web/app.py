from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from typing import Optional
import contextlib
import logging

from src.core.config import Settings, get_settings
from src.core.gateway import Gateway

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the API application. The gateway is created once in the lifespan."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        gateway = Gateway.from_settings(settings)
        if settings.environment != "production":
            await gateway.create_all()
        app.state.gateway = gateway
        logger.info(f"Gateway ready ({settings.environment})")

        yield

        await gateway.dispose()

    app = FastAPI(
        title="Company Intelligence API",
        description="Company directory search, detail pages, watchlists and activity history",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Sign-in and token sessions"},
            {"name": "Search", "description": "Typeahead and advanced company search"},
            {"name": "Companies", "description": "Role-filtered company detail and export"},
            {"name": "Comparison", "description": "Side-by-side company comparison"},
            {"name": "Market", "description": "Market analysis aggregates"},
            {"name": "Watchlists", "description": "User watchlists"},
            {"name": "Activity", "description": "User activity history"},
            {"name": "Storage", "description": "Avatar and company asset uploads"},
            {"name": "Contact", "description": "Contact form and inbox"},
        ],
    )
    app.state.settings = settings

    from src.web.routers import register_routers

    register_routers(app)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],  # Vite Dev Server
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    return app
