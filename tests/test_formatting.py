import io

import pytest

from userctl.db import RowSet
from userctl.formatting import render

USERS = RowSet("SELECT", ("username",), [("alice",), ("bob",)], 2)


def rendered(rowset, fmt):
    out = io.StringIO()
    render(rowset, out, fmt)
    return out.getvalue()


def test_pretty():
    assert rendered(USERS, "pretty") == "username\n--------\nalice\nbob\n(2 rows)\n"


def test_tsv():
    assert rendered(USERS, "tsv") == "2 rows\nusername\nalice\nbob\n"


@pytest.mark.parametrize("fmt", ["pretty", "tsv"])
def test_statement_without_columns(fmt):
    assert rendered(RowSet("DELETE", (), [], 0), fmt) == "DELETE 0\n"


def test_bytes_and_null_cells():
    rowset = RowSet("SELECT", ("username", "hashedPassword"), [("alice", b"ab\xff"), ("bob", None)], 2)
    assert rendered(rowset, "tsv") == "2 rows\nusername\thashedPassword\nalice\tab\\xff\nbob\tNULL\n"


def test_pretty_pads_columns():
    rowset = RowSet("SELECT", ("username", "hashedPassword"), [("a-long-name", b"h")], 1)
    lines = rendered(rowset, "pretty").splitlines()
    assert lines[0] == "username     hashedPassword"
    assert lines[2] == "a-long-name  h"
    assert lines[-1] == "(1 row)"


def test_unknown_format():
    with pytest.raises(ValueError):
        render(USERS, io.StringIO(), "xml")
