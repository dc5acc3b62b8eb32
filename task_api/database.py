import logging

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, Session, create_engine

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task  # noqa: F401

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

    # Networked stores: validate pooled connections before handing them out
    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, class_=Session, autoflush=False)


def verify_connection(engine: Engine) -> None:
    """Open one connection and run a trivial query.

    Raises the driver error (wrapped by SQLAlchemy) if the store is
    unreachable.
    """
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
    logger.info("Connected to database at %s", engine.url.render_as_string(hide_password=True))


def create_tables(engine: Engine) -> None:
    """Create all database tables."""
    SQLModel.metadata.create_all(bind=engine)


def get_db(request: Request):
    """Dependency to get a database session bound to the app's engine."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
