from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class SignInConfig:
    # Read-only email identity is all the app needs
    scopes: tuple[str, ...] = ("https://www.googleapis.com/auth/userinfo.email",)

    # Desktop OAuth client JSON; searched in cwd, next to the executable, then bundled resources
    client_secret_name: str = "client_secret.json"
    client_secret_path: Optional[Path] = None

    # Token cache; defaults to "<executable dir>/tokens", else "./tokens"
    tokens_dir_name: str = "tokens"
    tokens_dir: Optional[Path] = None
    identity: str = "user"

    # Loopback receiver. Port 0 means any free port.
    host: str = "localhost"
    ports: tuple[int, ...] = (8888, 8080, 9999, 0)
    open_browser: bool = True

    # Wipe cached tokens before signing in so Google shows the account chooser
    force_account_selection: bool = False
