# cuebook/db.py

from sqlmodel import SQLModel, create_engine, Session

from cuebook.config import settings

# SQLite needs check_same_thread off because FastAPI serves sync routes from a thread pool
_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(
    settings.database_url,
    echo=False,
    connect_args=_connect_args,
)


def init_db(bind=None):
    # Importing models registers the tables on SQLModel.metadata
    from cuebook import models  # noqa: F401

    SQLModel.metadata.create_all(bind if bind is not None else engine)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session
