from typing import TextIO

from .db import RowSet

FORMATS = ("pretty", "tsv")

def cell(value) -> str:
    if value is None:
        return "NULL"
    if isinstance(value, bytes):
        return value.decode("utf-8", "backslashreplace")
    return str(value)

def plural(n: int) -> str:
    return f"{n} row" if n == 1 else f"{n} rows"

def render(rowset: RowSet, out: TextIO, fmt: str = "pretty"):
    """Write ``rowset`` to ``out`` in the given output mode."""
    if fmt not in FORMATS:
        raise ValueError(f"unknown output format: {fmt}")
    if not rowset.columns:
        print(f"{rowset.statement} {rowset.rowcount}", file=out)
        return

    rows = [[cell(v) for v in row] for row in rowset.rows]
    if fmt == "tsv":
        print(plural(len(rows)), file=out)
        print("\t".join(rowset.columns), file=out)
        for row in rows:
            print("\t".join(row), file=out)
        return

    widths = [max([len(c)] + [len(r[i]) for r in rows]) for i, c in enumerate(rowset.columns)]
    print("  ".join(c.ljust(w) for c, w in zip(rowset.columns, widths)).rstrip(), file=out)
    print("-" * (sum(widths) + 2 * (len(widths) - 1)), file=out)
    for row in rows:
        print("  ".join(v.ljust(w) for v, w in zip(row, widths)).rstrip(), file=out)
    print(f"({plural(len(rows))})", file=out)
