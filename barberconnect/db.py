# barberconnect/db.py

import logging

from sqlmodel import SQLModel, create_engine, Session

from .config import DATABASE_URL, DB_ECHO

logger = logging.getLogger(__name__)

connect_args = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False  # required for SQLite + FastAPI

# Engine = connection to the database
engine = create_engine(
    DATABASE_URL,
    echo=DB_ECHO,
    connect_args=connect_args,
)


def create_db_and_tables():
    # models must be imported so their tables are registered on the metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info(f"Database tables ready on {engine.url.render_as_string(hide_password=True)}")


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session
