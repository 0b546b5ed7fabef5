import sys
from dataclasses import dataclass
from enum import Enum
from getpass import getpass
from typing import BinaryIO, Callable, Tuple

import structlog

from .crypto import Hasher
from .errors import EmptySecretError, MultilineSecretError, SecretTooLongError

STDIN_SENTINEL = "-"
MAX_LINE_BYTES = 64 * 1024

log = structlog.get_logger(__name__)


class SourceKind(Enum):
    PROMPT = "prompt"
    PIPED = "piped"
    LITERAL = "literal"


@dataclass(frozen=True)
class PasswordSource:
    """Where the set command gets its plaintext secret from."""
    kind: SourceKind
    value: bytes = b""

    @classmethod
    def prompt(cls) -> "PasswordSource":
        return cls(SourceKind.PROMPT)

    @classmethod
    def piped(cls) -> "PasswordSource":
        return cls(SourceKind.PIPED)

    @classmethod
    def literal(cls, value: bytes) -> "PasswordSource":
        return cls(SourceKind.LITERAL, value)

    @classmethod
    def from_flag(cls, flag: str | None) -> "PasswordSource":
        # An empty flag counts as omitted.
        if not flag:
            return cls.prompt()
        if flag == STDIN_SENTINEL:
            return cls.piped()
        return cls.literal(flag.encode("utf-8"))

    def __repr__(self):
        # Never show the secret.
        return f"PasswordSource({self.kind.name})"


def prompt_for_password() -> bytes:
    while True:
        pw1 = getpass("Enter password: ")
        pw2 = getpass("Confirm password: ")
        if pw1 != pw2:
            print("Passwords do not match. Try again.\n", file=sys.stderr)
            continue
        if not pw1:
            print("Empty passwords are not permitted. Try again.\n", file=sys.stderr)
            continue
        return pw1.encode("utf-8")

def read_line(stream: BinaryIO) -> Tuple[bytes, bool]:
    """Read the first line of ``stream`` and report whether anything follows it."""
    # Room for a trailing "\r\n" after a line of exactly MAX_LINE_BYTES.
    line = stream.readline(MAX_LINE_BYTES + 2)
    if line.endswith(b"\n"):
        line = line[:-1]
        if line.endswith(b"\r"):
            line = line[:-1]
        has_more = bool(stream.read(1))
    else:
        has_more = False
    if len(line) > MAX_LINE_BYTES:
        raise SecretTooLongError(MAX_LINE_BYTES)
    return line, has_more

def acquire_password_hash(source: PasswordSource,
                          hasher: Hasher,
                          prompt: Callable[[], bytes] = prompt_for_password,
                          stdin: BinaryIO | None = None) -> bytes:
    log.debug("acquiring password", source=source.kind.value)
    if source.kind is SourceKind.PROMPT:
        return hasher.hash(prompt())

    if source.kind is SourceKind.PIPED:
        stream = stdin if stdin is not None else sys.stdin.buffer
        line, has_more = read_line(stream)
        if not line:
            raise EmptySecretError()
        hashed = hasher.hash(line)
        if has_more:
            raise MultilineSecretError()
        return hashed

    # Literal values are taken as-is; the caller owns their validity.
    return hasher.hash(source.value)
