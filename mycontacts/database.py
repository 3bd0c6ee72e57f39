# mycontacts/database.py
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from mycontacts.core.config import get_settings

settings = get_settings()


def build_engine(db_url: str) -> Engine:
    """
    Create the SQLAlchemy engine for the configured backend.

    Postgres:
      - sslmode=require   : enforce SSL when running in the cloud
      - pool_size=1       : keep a single pooled connection per process
      - max_overflow=0    : do not open extra connections beyond the pool
      - pool_pre_ping=True: validate connections before using them

    SQLite (local dev / tests):
      - check_same_thread=False so FastAPI's threadpool can share connections
      - in-memory databases use a StaticPool, otherwise every connection
        would see its own empty database
    """
    url = make_url(db_url)

    if url.get_backend_name() == "sqlite":
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(db_url, echo=False, **kwargs)

    # Append sslmode=require if it is not already present
    if url.get_backend_name() == "postgresql" and "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return create_engine(
        db_url,
        echo=False,        # set to True if you want to debug SQL queries
        pool_pre_ping=True,
        pool_size=1,
        max_overflow=0,
    )


engine = build_engine(settings.DATABASE_URL)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup. Unique indexes on
    users.email and contacts(owner_id, phone) are created here too.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session
