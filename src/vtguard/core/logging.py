# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Structured logging with API key redaction."""

import json
import logging
import re
import sys
from typing import Any

REDACT_PATTERNS = [
    # apikey=<key> in query strings and form bodies
    re.compile(r"(apikey=[a-fA-F0-9]{6})[^&\s\"']*"),
    re.compile(r"(\"apikey\":\s*\"[a-fA-F0-9]{6})[^\"]*"),
]


def redact_sensitive(text: str) -> str:
    for pattern in REDACT_PATTERNS:
        text = pattern.sub(r"\1[REDACTED]", text)
    return text


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_sensitive(record.getMessage()),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = redact_sensitive(str(record.exc_info[1]))
        return json.dumps(log_entry)


class TextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        return redact_sensitive(msg)


TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Send ``vtguard`` and ``httpx`` logs to stderr through a redacting formatter.

    httpx logs every request URL, query string included, so it shares the
    handler and stays at WARNING unless *level* is DEBUG.
    """
    numeric = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(TextFormatter(TEXT_FORMAT))

    root = logging.getLogger("vtguard")
    root.setLevel(numeric)
    root.handlers.clear()
    root.addHandler(handler)

    transport = logging.getLogger("httpx")
    transport.setLevel(numeric if numeric <= logging.DEBUG else logging.WARNING)
    transport.handlers.clear()
    transport.addHandler(handler)
    transport.propagate = False
