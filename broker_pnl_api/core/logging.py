import logging
import sys

_LOGGING_CONFIGURED = False


def setup_logging(level: int = logging.INFO) -> None:
    """Configure logging to output to stdout with proper formatting."""
    global _LOGGING_CONFIGURED  # noqa: PLW0603 - single initialisation guard

    if _LOGGING_CONFIGURED:
        return
    root_logger = logging.getLogger()
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    # The core logs every evaluation cycle at DEBUG
    logging.getLogger("broker_pnl").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    _LOGGING_CONFIGURED = True
