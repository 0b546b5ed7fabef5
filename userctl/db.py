import os, sqlite3
from contextlib import contextmanager
from typing import Any, NamedTuple

import structlog

from .errors import BackendError

DEFAULT_DB = os.path.expanduser("~/.userctl/users.db")

log = structlog.get_logger(__name__)


class RowSet(NamedTuple):
    statement: str
    columns: tuple
    rows: list
    rowcount: int


def ensure_dir_for(path: str):
    d = os.path.dirname(os.path.abspath(path))
    if d and not os.path.exists(d):
        os.makedirs(d, exist_ok=True)

def connect(db_path: str) -> sqlite3.Connection:
    try:
        if db_path != ":memory:":
            ensure_dir_for(db_path)
        conn = sqlite3.connect(db_path)
    except (sqlite3.Error, OSError) as e:
        raise BackendError(f"cannot open database {db_path}: {e}") from e
    try:
        init_db(conn)
    except sqlite3.Error as e:
        conn.close()
        raise BackendError(f"cannot open database {db_path}: {e}") from e
    return conn

def init_db(conn: sqlite3.Connection):
    conn.execute("""
        CREATE TABLE IF NOT EXISTS users (
            username TEXT PRIMARY KEY,
            hashedPassword BLOB
        );
    """)
    conn.commit()


class Connection:
    """Statement executor over an open SQLite connection."""

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def execute(self, statement: str, *params: Any) -> RowSet:
        tag = statement.split(None, 1)[0].upper()
        try:
            cur = self._conn.execute(statement, params)
            if cur.description is None:
                rowset = RowSet(tag, (), [], cur.rowcount)
            else:
                columns = tuple(d[0] for d in cur.description)
                rows = cur.fetchall()
                rowset = RowSet(tag, columns, rows, len(rows))
        except sqlite3.Error as e:
            raise BackendError(str(e)) from e
        log.debug("statement executed", statement=tag, rowcount=rowset.rowcount)
        return rowset


@contextmanager
def session(db_path: str):
    """Open a connection for one command; commit on success, always close."""
    conn = connect(db_path)
    log.debug("connection opened", db=db_path)
    try:
        yield Connection(conn)
        conn.commit()
    except sqlite3.Error as e:
        conn.rollback()
        raise BackendError(str(e)) from e
    except BaseException:
        conn.rollback()
        raise
    finally:
        conn.close()
        log.debug("connection closed", db=db_path)
