# login_keyring/logging/logger.py

import logging
import structlog

def setup_logging(verbose: bool = False, log_format: str = 'plain'):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s [%(levelname)s] [%(name)s] %(message)s', force=True)
    renderer = structlog.processors.JSONRenderer() if log_format == 'json' else structlog.processors.KeyValueRenderer(key_order=['event'])
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
