from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from utils.logger import log_event


class TokenStore:
    """
    File-backed credential cache: one `<identity>.json` per identity.

    Not locked; two processes refreshing the same identity may race.
    """

    def __init__(self, directory: Path, logger: Optional[logging.Logger] = None) -> None:
        self.directory = Path(directory)
        self.logger = logger or logging.getLogger("gpa_tracker")

    def path_for(self, identity: str) -> Path:
        return self.directory / f"{identity}.json"

    def load(self, identity: str, scopes: Iterable[str]) -> Optional[Credentials]:
        """
        Cached credentials that are usable right now, or None.

        Expired or undated tokens with a refresh token are refreshed and
        written back.
        A rejected refresh or an unreadable file counts as "no credential".
        """
        path = self.path_for(identity)
        if not path.exists():
            return None

        try:
            creds = Credentials.from_authorized_user_file(str(path), scopes=list(scopes))
        except (OSError, ValueError) as e:
            log_event(self.logger, "token_unreadable", path=str(path), error=str(e))
            return None

        # A token with no recorded expiry can't be trusted as fresh
        if creds.valid and creds.expiry is not None:
            log_event(self.logger, "token_cache_hit", level=logging.DEBUG, identity=identity)
            return creds

        if creds.refresh_token:
            try:
                creds.refresh(Request())
            except RefreshError as e:
                log_event(self.logger, "token_refresh_rejected", identity=identity, error=str(e))
                return None
            self.save(identity, creds)
            log_event(self.logger, "token_refreshed", identity=identity)
            return creds

        return None

    def save(self, identity: str, creds: Credentials) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self.path_for(identity).write_text(creds.to_json(), encoding="utf-8")

    def clear(self) -> bool:
        """
        Delete the whole directory, best-effort.

        Per-entry failures are logged and skipped. Returns False when there
        was nothing to delete.
        """
        if not self.directory.exists():
            return False

        # Deepest entries first so directories are empty when we reach them
        entries = sorted(self.directory.rglob("*"), key=lambda p: len(p.parts), reverse=True)
        for entry in entries + [self.directory]:
            try:
                if entry.is_dir() and not entry.is_symlink():
                    entry.rmdir()
                else:
                    entry.unlink()
            except OSError as e:
                log_event(self.logger, "token_delete_failed", path=str(entry), error=str(e))
        return True
