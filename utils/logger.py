from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, Optional, TextIO

# Access tokens, refresh tokens and installed-app client secrets
_SECRET_RE = re.compile(r"ya29\.[\w\-]+|1//[\w\-]+|GOCSPX-[\w\-]+")
_EMAIL_RE = re.compile(r"\b([\w.+\-])[\w.+\-]*@([\w\-]+(?:\.[\w\-]+)+)\b")
_DROPPED_KEYS = frozenset({"token", "access_token", "refresh_token", "id_token", "client_secret"})
_MAX_CHARS = 2000


def scrub(value: Any) -> Any:
    """
    Make a log field safe to print.

    Secrets are masked, email addresses keep only their first letter and
    domain, credential-bearing keys are dropped, paths become strings.
    """
    if isinstance(value, PurePath):
        value = str(value)
    if isinstance(value, str):
        text = _EMAIL_RE.sub(r"\1***@\2", _SECRET_RE.sub("[REDACTED_TOKEN]", value))
        return text if len(text) <= _MAX_CHARS else text[:_MAX_CHARS] + "...[TRUNCATED]"
    if isinstance(value, dict):
        return {k: scrub(v) for k, v in value.items() if str(k).lower() not in _DROPPED_KEYS}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [scrub(v) for v in value]
    return value


@dataclass(frozen=True)
class Logger:
    name: str = "gpa_tracker"
    level: int = logging.INFO
    # None means stderr
    stream: Optional[TextIO] = None

    def build(self) -> logging.Logger:
        logger = logging.getLogger(self.name)
        logger.setLevel(self.level)
        if not logger.handlers:
            handler = logging.StreamHandler(self.stream)
            handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
            logger.addHandler(handler)
        logger.propagate = False
        return logger


def log_event(logger: logging.Logger, event: str, *, level: int = logging.INFO, **fields: Any) -> None:
    """One JSON object per line: {"event": ..., **fields}, scrubbed."""
    if not logger.isEnabledFor(level):
        return
    logger.log(level, json.dumps({"event": event, **scrub(fields)}, ensure_ascii=False, default=str))
