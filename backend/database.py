# backend/database.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings

SQLALCHEMY_DATABASE_URL = settings.database_url


def _enable_sqlite_foreign_keys(dbapi_conn, _):
    # SQLite ignores ON DELETE rules unless asked per connection
    cur = dbapi_conn.cursor()
    try:
        cur.execute("PRAGMA foreign_keys=ON;")
    finally:
        cur.close()


def build_engine(url: str, echo: bool = False):
    """Create an engine with the connection options the backend needs."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        # In-memory SQLite lives inside a single connection
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs = {"pool_pre_ping": True}

    eng = create_engine(url, echo=echo, **kwargs)
    if url.startswith("sqlite"):
        event.listen(eng, "connect", _enable_sqlite_foreign_keys)
    return eng


engine = build_engine(SQLALCHEMY_DATABASE_URL, echo=settings.DEBUG)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def import_models():
    # Register every table on Base.metadata
    import models.warehouse  # noqa: F401
    import models.product  # noqa: F401
    import models.inventory  # noqa: F401
    import models.transfer  # noqa: F401
    import models.alert  # noqa: F401
    import models.log  # noqa: F401

def init_db(bind=None):
    import_models()
    Base.metadata.create_all(bind=bind or engine)
