"""
Key-Value Backend API Server
Form-driven insert, search, update, create, delete and list over a single PostgreSQL table
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from config.settings import STATIC_DIR
from database.connection import init_database, close_database
from api.routes import health, key_values
from utils.error_handling import setup_error_handling

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - the schema must exist before requests are served"""
    app.state.db_pool = await init_database()
    yield
    await close_database(app.state.db_pool)


def create_app() -> FastAPI:
    """Build the FastAPI application with routes, error handling and static files"""
    app = FastAPI(
        title="Key-Value Backend",
        description="HTML form backend for a key-value table",
        version="1.0.0",
        lifespan=lifespan
    )

    setup_error_handling(app)

    app.include_router(health.router, tags=["Health"])
    app.include_router(key_values.router, tags=["Key Values"])

    # Mounted last so the routes above take precedence over static paths
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True, check_dir=False), name="static")

    return app


# FastAPI app instance is exported for use by uvicorn
# Server startup is handled by main.py at the project root
app = create_app()
