"""Logging filters that scrub credentials from log output."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+"
    r"|access_token\"\s*:\s*\"[^\"]+\""
    r"|password\"\s*:\s*\"[^\"]+\""
    r"|password=[^&\s]+)",
    re.IGNORECASE,
)

REDACTED = "**REDACTED**"


def scrub(message: str) -> str:
    """Replace bearer tokens and passwords in a message."""
    return _SENSITIVE_PATTERN.sub(REDACTED, message)


class SensitiveFilter(logging.Filter):
    """Replace credentials in log messages and string arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = scrub(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                scrub(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


def install_sensitive_filter(*logger_names: str) -> None:
    """Attach a single SensitiveFilter to each named logger."""
    for name in logger_names:
        target = logging.getLogger(name)
        if not any(isinstance(flt, SensitiveFilter) for flt in target.filters):
            target.addFilter(SensitiveFilter())


__all__ = ["REDACTED", "SensitiveFilter", "install_sensitive_filter", "scrub"]
