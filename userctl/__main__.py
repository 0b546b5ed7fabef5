import sys

import structlog

from .cli import build_parser
from .errors import UsageError, UserctlError
from .logs import setup_logging

"""
userctl: manage username/password-hash records from the command line.
- SQLite for storage
- cryptography (PBKDF2-HMAC-SHA256) for password hashing
- Argparse CLI with subcommands
Usage examples:
    python -m userctl user set alice              (prompts twice)
    echo "s3cret" | python -m userctl user set alice --password -
    python -m userctl user get alice
    python -m userctl --format tsv user ls
    python -m userctl user rm alice
"""

log = structlog.get_logger(__name__)

def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    try:
        args.func(args)
    except UsageError as e:
        args.parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code
    except UserctlError as e:
        log.debug("command failed", error=type(e).__name__)
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nAborted by user.", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
