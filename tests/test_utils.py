import io

import pytest

from userctl import utils
from userctl.crypto import DEFAULT_KDF_ITERS
from userctl.db import DEFAULT_DB
from userctl.errors import UsageError


class Tty(io.StringIO):
    def isatty(self):
        return True


def test_db_path_precedence(monkeypatch):
    monkeypatch.delenv("USERCTL_DB", raising=False)
    assert utils.resolve_db_path(None) == DEFAULT_DB
    monkeypatch.setenv("USERCTL_DB", "/tmp/env.db")
    assert utils.resolve_db_path(None) == "/tmp/env.db"
    assert utils.resolve_db_path("/tmp/flag.db") == "/tmp/flag.db"


def test_format_defaults_follow_terminal(monkeypatch):
    monkeypatch.delenv("USERCTL_FORMAT", raising=False)
    assert utils.resolve_format(None, Tty()) == "pretty"
    assert utils.resolve_format(None, io.StringIO()) == "tsv"


def test_format_precedence(monkeypatch):
    monkeypatch.setenv("USERCTL_FORMAT", "tsv")
    assert utils.resolve_format(None, Tty()) == "tsv"
    assert utils.resolve_format("pretty", Tty()) == "pretty"


def test_unknown_format_from_env(monkeypatch):
    monkeypatch.setenv("USERCTL_FORMAT", "xml")
    with pytest.raises(UsageError):
        utils.resolve_format(None)


def test_kdf_iters(monkeypatch):
    monkeypatch.delenv("USERCTL_KDF_ITERS", raising=False)
    assert utils.resolve_kdf_iters(None) == DEFAULT_KDF_ITERS
    monkeypatch.setenv("USERCTL_KDF_ITERS", "5000")
    assert utils.resolve_kdf_iters(None) == 5000
    assert utils.resolve_kdf_iters(42) == 42


@pytest.mark.parametrize("env, flag", [("abc", None), ("0", None), (None, -1)])
def test_invalid_kdf_iters(monkeypatch, env, flag):
    if env is None:
        monkeypatch.delenv("USERCTL_KDF_ITERS", raising=False)
    else:
        monkeypatch.setenv("USERCTL_KDF_ITERS", env)
    with pytest.raises(UsageError):
        utils.resolve_kdf_iters(flag)
