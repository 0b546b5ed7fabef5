"""Shared fixtures for the userctl test suite."""
import pytest

from userctl import db
from userctl.crypto import Hasher
from userctl.logs import setup_logging


class RecordingHasher(Hasher):
    """Deterministic stand-in that records every secret it is given."""

    def __init__(self):
        super().__init__(iterations=1)
        self.calls = []

    def hash(self, secret: bytes) -> bytes:
        self.calls.append(secret)
        return b"hashed:" + secret


class ForbiddenBackend:
    """open_connection replacement that fails the test when used."""

    def __init__(self):
        self.opened = 0

    def __call__(self):
        self.opened += 1
        raise AssertionError("backend must not be contacted")


@pytest.fixture(autouse=True, scope="session")
def debug_logging():
    setup_logging(verbose=True)


@pytest.fixture()
def db_path(tmp_path):
    return str(tmp_path / "data" / "users.db")


@pytest.fixture()
def open_connection(db_path):
    return lambda: db.session(db_path)


@pytest.fixture()
def hasher():
    return RecordingHasher()


@pytest.fixture()
def fast_hasher():
    return Hasher(iterations=1000, salt=b"\x00" * 16)


@pytest.fixture()
def forbidden_backend():
    return ForbiddenBackend()
