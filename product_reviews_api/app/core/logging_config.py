"""
Logging setup for the Product Reviews API.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger the first time it is called.  Every
handler carries ``RedactTokenFilter`` so a Shopify access token that
ends up in a message or an exception text is masked before it is
written.  httpx and httpcore log each request at INFO; they are held
at WARNING because the upstream client logs its own outcome.
"""

import logging
import re
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Admin API, custom app, partner and storefront token prefixes.
_TOKEN_RE = re.compile(r"\b(shpat|shpca|shppa|shpss)_[A-Za-z0-9]+")

_NOISY_LOGGERS = ("httpx", "httpcore")


def redact_tokens(text: str) -> str:
    return _TOKEN_RE.sub(lambda m: f"{m.group(1)}_***", text)


class RedactTokenFilter(logging.Filter):
    """Mask Shopify access tokens in the rendered log message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_tokens(message)
        if redacted != message:
            record.msg = redacted
            record.args = ()
        return True


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    ``level`` is a level name, case insensitive; unknown names fall back
    to INFO.  ``logfile`` adds a UTF-8 file handler, creating its
    directory if needed.
    """
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(RedactTokenFilter())
        root.addHandler(handler)
