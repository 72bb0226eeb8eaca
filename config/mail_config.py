from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class MailConfig:
    # Send-only; the test mail never reads the mailbox
    scopes: tuple[str, ...] = ("https://www.googleapis.com/auth/gmail.send",)

    client_secret_name: str = "client_secret.json"
    client_secret_path: Optional[Path] = None

    # Shares the sign-in token directory under its own identity
    tokens_dir_name: str = "tokens"
    tokens_dir: Optional[Path] = None
    identity: str = "mail"

    host: str = "localhost"
    ports: tuple[int, ...] = (8888, 8080, 9999, 0)

    recipient: str = "gpa.tracker.test@example.com"
    subject: str = "GPA Tracker - mail test"
    body: str = (
        "This is a test email from your GPA Tracker app. "
        "If you received this, mail delivery works."
    )
