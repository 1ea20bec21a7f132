from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings

engine = create_engine(
    settings.APP_DATABASE_DSN,
    connect_args=({"check_same_thread": False} if "sqlite" in settings.APP_DATABASE_DSN else {}),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base: Any = declarative_base()


@contextmanager
def session_scope() -> Iterator[Session]:
    """Session for code running outside a request, such as the arq sweeps."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_db() -> Generator[Session, None, None]:
    with session_scope() as db:
        yield db


def init_db() -> None:
    """Create every storefront table missing from the bound database."""
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
