import os
import sys

from .crypto import DEFAULT_KDF_ITERS
from .db import DEFAULT_DB
from .errors import UsageError
from .formatting import FORMATS

def resolve_db_path(cli_path: str | None) -> str:
    if cli_path: return cli_path
    env = os.getenv("USERCTL_DB")
    return env if env else DEFAULT_DB

def resolve_format(cli_fmt: str | None, stream=None) -> str:
    fmt = cli_fmt or os.getenv("USERCTL_FORMAT")
    if not fmt:
        stream = stream if stream is not None else sys.stdout
        isatty = getattr(stream, "isatty", None)
        return "pretty" if isatty and isatty() else "tsv"
    if fmt not in FORMATS:
        raise UsageError(f"unknown output format {fmt!r} (choose from {', '.join(FORMATS)})")
    return fmt

def resolve_kdf_iters(cli_iters: int | None) -> int:
    if cli_iters is not None:
        iters = cli_iters
    else:
        raw = os.getenv("USERCTL_KDF_ITERS")
        if not raw:
            return DEFAULT_KDF_ITERS
        try:
            iters = int(raw)
        except ValueError:
            raise UsageError(f"USERCTL_KDF_ITERS must be an integer, got {raw!r}")
    if iters < 1:
        raise UsageError("KDF iterations must be positive")
    return iters
