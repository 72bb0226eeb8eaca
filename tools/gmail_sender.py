from __future__ import annotations

import base64
from dataclasses import dataclass
from email.mime.text import MIMEText


@dataclass(frozen=True)
class SendResult:
    id: str
    thread_id: str


def build_message(to: str, subject: str, body: str) -> MIMEText:
    msg = MIMEText(body, _charset="utf-8")
    msg["To"] = to
    msg["Subject"] = subject
    return msg


def send_email(service, to: str, subject: str, body: str) -> SendResult:
    """Single send through users.messages.send; no retry."""
    raw = base64.urlsafe_b64encode(build_message(to, subject, body).as_bytes()).decode("utf-8")
    sent = (
        service.users()
        .messages()
        .send(userId="me", body={"raw": raw})
        .execute()
    )
    return SendResult(id=sent.get("id", ""), thread_id=sent.get("threadId", ""))
