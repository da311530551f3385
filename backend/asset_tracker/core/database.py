from contextlib import contextmanager
from pathlib import Path

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

from .gateway import Gateway
from .settings import settings

# check_same_thread=False is needed only for SQLite
connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, connect_args=connect_args)

def create_db_and_tables(bind: Engine | None = None):
    # Import models to register them with SQLModel
    from .. import models  # noqa: F401

    bind = bind or engine
    database = bind.url.database
    if bind.url.get_backend_name() == "sqlite" and database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)
    SQLModel.metadata.create_all(bind)

@contextmanager
def unit_of_work(bind: Engine | None = None):
    """Open one bounded scope against the store; released on every exit path."""
    with Session(bind or engine, expire_on_commit=False) as session:
        yield Gateway(session)
