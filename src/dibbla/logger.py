import logging
import os
import sys
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler


def is_rich_logging_enabled() -> bool:
    """Check if Rich log rendering was requested through the environment."""
    return os.environ.get("DIBBLA_RICH_LOGS", "false").lower() in ("true", "1", "yes")


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    stream=sys.stderr,
    fmt: Optional[str] = None,
):
    """
    Sets up the root logger with a stream handler and basic formatting.
    Uses a Rich handler when DIBBLA_RICH_LOGS is enabled, otherwise falls back
    to standard logging. Does nothing if handlers are already configured,
    except for adjusting the level.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    if not root_logger.hasHandlers():
        if is_rich_logging_enabled():
            handler = RichHandler(
                console=Console(file=stream),
                show_time=True,
                show_path=False,
                rich_tracebacks=True,
            )
        else:
            if fmt is None:
                if level == logging.DEBUG:
                    fmt = "%(asctime)s | %(levelname)-5s | %(name)s | %(filename)s:%(lineno)d | %(message)s"
                else:
                    fmt = "%(asctime)s | %(levelname)-5s | %(message)s"

            handler = logging.StreamHandler(stream)
            handler.setFormatter(logging.Formatter(fmt))

        root_logger.addHandler(handler)

    root_logger.setLevel(level)

    # Optionally allow log level override via env var
    env_level = os.environ.get("LOG_LEVEL")
    if env_level:
        root_logger.setLevel(env_level.upper())

    # httpx logs every request at INFO; keep it quiet unless debugging
    if root_logger.level > logging.DEBUG:
        logging.getLogger("httpx").setLevel(logging.WARNING)
