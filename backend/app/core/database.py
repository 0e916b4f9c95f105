"""SQLite engine and per-request database sessions."""

from sqlmodel import SQLModel, create_engine, Session

from app.core.config import settings

engine = create_engine(
    f"sqlite:///{settings.db_path}",
    echo=settings.debug,
    connect_args={"check_same_thread": False},
)


def init_db() -> None:
    from app import models  # noqa: F401 - ensure tables are registered on the metadata
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(engine)


def get_session():
    """FastAPI dependency yielding one database session per request."""
    with Session(engine) as db:
        yield db
