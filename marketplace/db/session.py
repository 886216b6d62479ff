from sqlalchemy import event
from sqlmodel import SQLModel, create_engine, Session
from marketplace.core.config import settings


def build_engine(url: str, **kwargs):
    """Create an engine; SQLite connections get foreign key enforcement turned on."""
    if not url.startswith("sqlite"):
        return create_engine(url, **kwargs)

    # check_same_thread is needed for SQLite, handlers run in a threadpool
    engine = create_engine(url, connect_args={"check_same_thread": False}, **kwargs)

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


engine = build_engine(settings.DATABASE_URL)

def get_session():
    with Session(engine) as session:
        yield session

def create_db_and_tables():
    SQLModel.metadata.create_all(engine)
