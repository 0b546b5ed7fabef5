import argparse
import functools

from . import db
from . import utils
from .crypto import DEFAULT_KDF_ITERS, Hasher
from .formatting import FORMATS
from .password import PasswordSource
from .users import UserCommands


def make_commands(args, hasher: Hasher | None = None) -> UserCommands:
    db_path = utils.resolve_db_path(args.db)
    fmt = utils.resolve_format(args.format)
    return UserCommands(functools.partial(db.session, db_path), hasher, fmt=fmt)


def cmd_get(args):
    make_commands(args).get(args.args)


def cmd_ls(args):
    make_commands(args).ls(args.args)


def cmd_rm(args):
    make_commands(args).rm(args.args)


def cmd_set(args):
    source = PasswordSource.from_flag(args.password)
    hasher = Hasher(iterations=utils.resolve_kdf_iters(args.kdf_iters))
    make_commands(args, hasher).set(args.args, source)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="userctl", description="Manage users stored in a SQLite table")
    parser.add_argument("--db", help=f"Path to SQLite DB (or set USERCTL_DB). Default: {db.DEFAULT_DB}")
    parser.add_argument("--format", choices=FORMATS,
                        help="Output format (or set USERCTL_FORMAT). Default: pretty on a terminal, tsv otherwise")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    user = sub.add_parser("user", help="get, set, list and remove users")
    user.set_defaults(func=lambda args: user.print_usage(), parser=user)
    user_sub = user.add_subparsers(dest="user_command")

    # Positionals are collected as-is; the commands check their own arity.
    # get
    s = user_sub.add_parser("get", help="fetch and display a user")
    s.add_argument("args", nargs="*", metavar="username")
    s.set_defaults(func=cmd_get, parser=s)

    # ls
    s = user_sub.add_parser("ls", help="list all users")
    s.add_argument("args", nargs="*", help=argparse.SUPPRESS)
    s.set_defaults(func=cmd_ls, parser=s)

    # rm
    s = user_sub.add_parser("rm", help="remove a user")
    s.add_argument("args", nargs="*", metavar="username")
    s.set_defaults(func=cmd_rm, parser=s)

    # set
    s = user_sub.add_parser("set", help="create or update a user, prompting for the password")
    s.add_argument("args", nargs="*", metavar="username")
    s.add_argument("--password",
                   help=("Password to set; '-' reads a single line from stdin. Prompts when omitted. "
                         "Write values starting with '-' as --password=-value"))
    s.add_argument("--kdf-iters", type=int,
                   help=f"PBKDF2 iterations (or set USERCTL_KDF_ITERS). Default {DEFAULT_KDF_ITERS}")
    s.set_defaults(func=cmd_set, parser=s)

    return parser
