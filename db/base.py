from typing import Optional

from peewee import DatabaseProxy, Model
from playhouse.db_url import connect

from core.logging import get_logger
from core.settings import settings

# Bound at startup by init_db(); tests bind an in-memory SqliteDatabase instead
db = DatabaseProxy()

log = get_logger("db")


class BaseModel(Model):
    class Meta:
        database = db


def bind_database(database_url: Optional[str] = None):
    """Create the peewee database for a db_url string and bind it to the proxy."""
    url = database_url or settings.database_url
    kwargs = {}
    if "+pool" in url.split("://", 1)[0]:
        kwargs["max_connections"] = settings.database_max_connections
        kwargs["stale_timeout"] = 300
    database = connect(url, **kwargs)
    db.initialize(database)
    return database


# Function to initialize database connection
def init_db(database_url: Optional[str] = None) -> None:
    """Bind the database, connect, and create tables if they don't exist."""
    from db.models import ALL_MODELS

    bind_database(database_url)
    db.connect(reuse_if_open=True)

    # safe=True is idempotent; order follows foreign key dependencies
    db.create_tables(ALL_MODELS, safe=True)
    log.info("database_initialized", tables=len(ALL_MODELS))


# Function to close database connection
def close_db() -> None:
    """Close database connection."""
    if db.obj is not None and not db.is_closed():
        db.close()
        log.info("database_closed")
