from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, NamedTuple, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from config.signin_config import SignInConfig
from tools.google_oauth import load_or_authorize
from tools.resource_locator import (
    ClientSecretNotFoundError,
    locate,
    resolve_tokens_dir,
    tokens_dir_candidates,
)
from tools.token_store import TokenStore
from utils.logger import Logger, log_event


class SignInResult(NamedTuple):
    email: Optional[str]
    username: str


def suggest_username(email: Optional[str]) -> str:
    """Local part of the address, or "user" when there isn't a usable one."""
    if not email or "@" not in email:
        return "user"
    local = email.split("@", 1)[0]
    return local or "user"


def fetch_userinfo(creds: Credentials) -> dict[str, Any]:
    oauth2 = build("oauth2", "v2", credentials=creds, cache_discovery=False)
    return oauth2.userinfo().get().execute()


def _client_secret_path(cfg: SignInConfig) -> Path:
    if cfg.client_secret_path is None:
        return locate(cfg.client_secret_name)
    path = Path(cfg.client_secret_path)
    if not path.is_file():
        raise ClientSecretNotFoundError(f"Missing {path.name} at '{path}'.")
    return path


def authenticate(cfg: Optional[SignInConfig] = None) -> SignInResult:
    """
    Sign the user in with Google and return (email, suggested username).

    Reuses the cached token when it is still valid (or refreshable);
    otherwise opens the browser and blocks on the loopback redirect.
    Errors from the OAuth/network layer propagate unchanged.
    """
    cfg = cfg or SignInConfig()
    logger = Logger().build()

    # Fail before any network traffic if the client JSON is missing
    client_path = _client_secret_path(cfg)
    log_event(logger, "client_secret_found", level=logging.DEBUG, path=client_path)

    if cfg.force_account_selection:
        clear_stored_credentials(cfg)

    tokens_dir = resolve_tokens_dir(cfg.tokens_dir_name, cfg.tokens_dir)
    log_event(logger, "tokens_dir", level=logging.DEBUG, path=tokens_dir.resolve())

    creds = load_or_authorize(
        client_path,
        TokenStore(tokens_dir, logger=logger),
        identity=cfg.identity,
        scopes=cfg.scopes,
        host=cfg.host,
        ports=cfg.ports,
        open_browser=cfg.open_browser,
        logger=logger,
        prompt="select_account",
        include_granted_scopes="true",
    )

    info = fetch_userinfo(creds)
    email = info.get("email")
    log_event(logger, "signed_in", email=email)
    return SignInResult(email=email, username=suggest_username(email))


def clear_stored_credentials(cfg: Optional[SignInConfig] = None) -> bool:
    """
    Forget cached tokens so the next authenticate() asks for consent again.

    Removes every candidate token directory. Individual delete failures are
    logged and ignored. Returns True if anything was there to remove.
    """
    cfg = cfg or SignInConfig()
    logger = Logger().build()

    dirs = [Path(cfg.tokens_dir)] if cfg.tokens_dir is not None else tokens_dir_candidates(cfg.tokens_dir_name)
    removed = False
    for d in dirs:
        if TokenStore(d, logger=logger).clear():
            log_event(logger, "tokens_cleared", path=str(d))
            removed = True
    return removed
