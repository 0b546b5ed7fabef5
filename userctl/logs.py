import logging
import sys

import structlog

def setup_logging(verbose: bool = False, stream=None):
    """Route structlog through stdlib logging on stderr."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level,
                        stream=stream if stream is not None else sys.stderr,
                        format="%(asctime)s [%(levelname)s] [%(name)s] %(message)s",
                        force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
