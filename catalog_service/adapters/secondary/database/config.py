from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()

# Execution options for sessions that will write. On SQLite the transaction
# takes the RESERVED lock at BEGIN, so a second writer waits on the busy
# timeout instead of deadlocking against our SHARED lock.
WRITE_TRANSACTION = {"sqlite_begin": "IMMEDIATE"}


def _enable_sqlite_transactions(engine: Engine) -> None:
    """
    Take over BEGIN from pysqlite and turn on foreign keys.

    pysqlite defers BEGIN until the first DML statement, which breaks
    SAVEPOINT: the first SAVEPOINT would open (and its RELEASE would commit)
    the outer transaction.
    """
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        mode = conn.get_execution_options().get("sqlite_begin")
        conn.exec_driver_sql(f"BEGIN {mode}" if mode else "BEGIN")


def make_engine(database_url: str, **kwargs) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(database_url, **kwargs)
    if url.get_backend_name() == "sqlite":
        _enable_sqlite_transactions(engine)
    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    # Registers the mapped tables on Base.metadata
    from catalog_service.adapters.secondary.database import orm  # noqa: F401

    Base.metadata.create_all(bind=engine)
