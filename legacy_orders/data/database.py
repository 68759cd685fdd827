# legacy_orders/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from legacy_orders.utils.settings import DATABASE_URL, DB_ISOLATION_LEVEL

Base = declarative_base()


def build_engine(url: str = DATABASE_URL, isolation_level: str = DB_ISOLATION_LEVEL) -> Engine:
    """
    Engine dla wspoldzielonej tabeli orders.
    SQLite (testy) nie zna READ COMMITTED, wiec tam poziom izolacji zostaje domyslny.
    """
    kwargs = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
    else:
        kwargs["isolation_level"] = isolation_level
    return create_engine(url, **kwargs)


engine = build_engine()
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
