import logging
import os
from typing import IO, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
LEVEL_ENV = "SPENDVIEW_LOG_LEVEL"

# Library modules log under "spendview.*" and stay quiet until an app
# or script calls configure_logging().
_root = logging.getLogger("spendview")
_root.addHandler(logging.NullHandler())
_handler: Optional[logging.Handler] = None


def resolve_level(level: Union[int, str, None] = None) -> int:
    """
    Turn a level given as an int, a name ("debug") or a number string ("15")
    into an int. None reads SPENDVIEW_LOG_LEVEL; anything unrecognised is INFO.
    """
    if level is None:
        level = os.environ.get(LEVEL_ENV, "")
    if isinstance(level, int):
        return level
    text = level.strip().upper()
    if text.isdigit():
        return int(text)
    named = logging.getLevelName(text)
    return named if isinstance(named, int) else logging.INFO


def configure_logging(level: Union[int, str, None] = None, stream: Optional[IO[str]] = None) -> logging.Handler:
    """Send "spendview" logs to ``stream`` (stderr by default). Later calls reuse the first handler."""
    global _handler
    if _handler is not None:
        return _handler

    resolved = resolve_level(level)
    _handler = logging.StreamHandler(stream)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _root.addHandler(_handler)
    _root.setLevel(resolved)
    _root.propagate = False
    return _handler


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
