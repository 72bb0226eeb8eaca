"""Pytest configuration shared across the suite."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable

import pytest
from google.oauth2.credentials import Credentials

PROJECT_ROOT = Path(__file__).resolve().parents[1]

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tools import resource_locator  # noqa: E402

EMAIL_SCOPE = "https://www.googleapis.com/auth/userinfo.email"


def utc_in(hours: float) -> datetime:
    """Naive UTC timestamp, the form google-auth compares expiries in."""
    return datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(hours=hours)


def make_credentials(token: str = "cached-token", **overrides: Any) -> Credentials:
    fields: dict[str, Any] = {
        "refresh_token": "refresh-1",
        "token_uri": "https://oauth2.googleapis.com/token",
        "client_id": "client-id",
        "client_secret": "client-secret",
        "scopes": [EMAIL_SCOPE],
        "expiry": utc_in(1),
    }
    fields.update(overrides)
    return Credentials(token=token, **fields)


class FakeUserinfo:
    def __init__(self, info: dict[str, Any]) -> None:
        self.info = info

    def get(self) -> "FakeUserinfo":
        return self

    def execute(self) -> dict[str, Any]:
        return self.info


class FakeOAuth2Service:
    def __init__(self, info: dict[str, Any]) -> None:
        self._userinfo = FakeUserinfo(info)

    def userinfo(self) -> FakeUserinfo:
        return self._userinfo


class FakeFlow:
    """Stands in for InstalledAppFlow; records every run_local_server call."""

    def __init__(self, outcomes: dict[int, Any] | None = None) -> None:
        self.outcomes = outcomes or {}
        self.calls: list[dict[str, Any]] = []
        self.client_secrets_file: str | None = None
        self.scopes: list[str] | None = None

    def from_client_secrets_file(self, path: str, scopes: list[str]) -> "FakeFlow":
        self.client_secrets_file = path
        self.scopes = scopes
        return self

    def run_local_server(self, **kwargs: Any) -> Credentials:
        self.calls.append(kwargs)
        outcome = self.outcomes.get(kwargs["port"], make_credentials("fresh-token"))
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class ForbiddenFlow:
    def from_client_secrets_file(self, *args: Any, **kwargs: Any) -> None:
        raise AssertionError("consent flow must not start")


@pytest.fixture
def fake_flow() -> FakeFlow:
    return FakeFlow()


@pytest.fixture
def userinfo_build() -> Callable[..., FakeOAuth2Service]:
    calls: list[tuple[Any, ...]] = []

    def build(*args: Any, **kwargs: Any) -> FakeOAuth2Service:
        calls.append(args)
        return FakeOAuth2Service({"id": "123", "email": "alice@example.com"})

    build.calls = calls  # type: ignore[attr-defined]
    return build


@pytest.fixture
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> dict[str, Path]:
    """Point cwd, the executable dir and the bundle dir at empty temp folders."""
    dirs = {name: tmp_path / name for name in ("cwd", "exe", "bundle")}
    for d in dirs.values():
        d.mkdir()
    monkeypatch.chdir(dirs["cwd"])
    monkeypatch.setattr(resource_locator, "executable_dir", lambda: dirs["exe"])
    monkeypatch.setattr(resource_locator, "bundle_dir", lambda: dirs["bundle"])
    return dirs
