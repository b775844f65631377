"""Log redaction for credentials that can reach pricing logs."""

from __future__ import annotations

import logging
import re

_MARKER = "**REDACTED**"

# Pattern, replacement. Database URLs keep their user and host.
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"(Authorization:\s*Bearer\s+)[\w\.-]+", re.IGNORECASE), rf"\g<1>{_MARKER}"),
    (re.compile(r"(access_token\"\s*:\s*\")[^\"]+(\")", re.IGNORECASE), rf"\g<1>{_MARKER}\g<2>"),
    (re.compile(r"(api_key=)[^\s&]+", re.IGNORECASE), rf"\g<1>{_MARKER}"),
    (re.compile(r"(\w+(?:\+\w+)?://[^:/\s@]+:)[^@\s]+(@)"), rf"\g<1>{_MARKER}\g<2>"),
)


def redact(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


class SensitiveFilter(logging.Filter):
    """Redact the message template and any string arguments of a record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


__all__ = ["SensitiveFilter", "redact"]
