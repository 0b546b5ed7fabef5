import sys
from typing import BinaryIO, Callable, ContextManager, Sequence, TextIO

import structlog

from .crypto import Hasher
from .db import Connection, RowSet
from .errors import UsageError
from .formatting import render
from .password import PasswordSource, acquire_password_hash, prompt_for_password

log = structlog.get_logger(__name__)


def check_arity(command: str, args: Sequence[str], expected: int):
    if len(args) != expected:
        raise UsageError(f"{command}: expected {expected} argument(s), got {len(args)}")


class UserCommands:
    """The get/ls/rm/set user commands.

    ``open_connection`` is a zero-argument callable returning a context
    manager that yields a :class:`~userctl.db.Connection` and releases it
    on exit. Every command validates its arguments before touching the
    backend, renders the result to ``out`` and returns it.
    """

    def __init__(self,
                 open_connection: Callable[[], ContextManager[Connection]],
                 hasher: Hasher | None = None,
                 out: TextIO | None = None,
                 fmt: str = "pretty",
                 prompt: Callable[[], bytes] = prompt_for_password,
                 stdin: BinaryIO | None = None):
        self.open_connection = open_connection
        self.hasher = hasher if hasher is not None else Hasher()
        self.out = out if out is not None else sys.stdout
        self.fmt = fmt
        self.prompt = prompt
        self.stdin = stdin

    def _run(self, statement: str, *params) -> RowSet:
        with self.open_connection() as conn:
            rowset = conn.execute(statement, *params)
            render(rowset, self.out, self.fmt)
        return rowset

    def get(self, args: Sequence[str]) -> RowSet:
        check_arity("get", args, 1)
        return self._run("SELECT * FROM users WHERE username = ?", args[0])

    def ls(self, args: Sequence[str]) -> RowSet:
        check_arity("ls", args, 0)
        return self._run("SELECT username FROM users")

    def rm(self, args: Sequence[str]) -> RowSet:
        check_arity("rm", args, 1)
        return self._run("DELETE FROM users WHERE username = ?", args[0])

    def set(self, args: Sequence[str], source: PasswordSource) -> RowSet:
        check_arity("set", args, 1)
        hashed = acquire_password_hash(source, self.hasher, self.prompt, self.stdin)
        log.debug("setting user", username=args[0], source=source.kind.value)
        return self._run(
            "INSERT OR REPLACE INTO users (username, hashedPassword) VALUES (?, ?)",
            args[0], hashed)
