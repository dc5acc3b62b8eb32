import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import API_DOCS_URL, API_TITLE, API_VERSION, CORS_ORIGINS, DATABASE_URL, SQL_ECHO
from .database import create_db_engine, create_session_factory, create_tables, verify_connection
from .errors import register_exception_handlers
from .routers import tasks

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    try:
        verify_connection(engine)
        create_tables(engine)
    except Exception:
        logger.exception("Error connecting to database")
        raise
    logger.info("API docs available at %s", API_DOCS_URL)
    yield
    engine.dispose()


def create_app(
    database_url: Optional[str] = None,
    cors_origins: Optional[List[str]] = None,
) -> FastAPI:
    """Build the API with its own database engine.

    The engine and session factory live on ``app.state``; requests get a
    session through ``database.get_db``.
    """
    app = FastAPI(
        title=API_TITLE,
        description="A simple Task Manager API",
        version=API_VERSION,
        docs_url=API_DOCS_URL,
        redoc_url=None,
        lifespan=lifespan,
    )

    engine = create_db_engine(database_url or DATABASE_URL, echo=SQL_ECHO)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Configure CORS
    origins = CORS_ORIGINS if cors_origins is None else cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(tasks.router, prefix="/api", tags=["Tasks"])

    @app.get("/health")
    def health_check():
        return {"status": "healthy"}

    return app


app = create_app()
