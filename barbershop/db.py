# barbershop/db.py

import logging

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

from barbershop.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def build_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    connect_args = dict(kwargs.pop("connect_args", {}))
    if database_url.startswith("sqlite"):
        # required for SQLite + FastAPI
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=echo, connect_args=connect_args, **kwargs)


# Engine = connection to the database
engine = build_engine(settings.database_url, echo=settings.db_echo)


def create_db_and_tables(bind: Engine = engine) -> None:
    # registers the table classes on SQLModel.metadata
    from barbershop import models  # noqa: F401

    SQLModel.metadata.create_all(bind)
    logger.info("Database tables ready")


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session
