from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import Any, Iterable, Optional

from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from config.mail_config import MailConfig
from tools.resource_locator import ClientSecretNotFoundError, locate, resolve_tokens_dir
from tools.token_store import TokenStore
from utils.logger import Logger, log_event

# Bind failures worth trying the next port for
_BUSY_PORT_ERRNOS = {
    code
    for code in (
        errno.EADDRINUSE,
        errno.EACCES,
        getattr(errno, "WSAEADDRINUSE", None),
        getattr(errno, "WSAEACCES", None),
    )
    if code is not None
}


def run_consent(
    flow: InstalledAppFlow,
    host: str,
    ports: Iterable[int],
    open_browser: bool = True,
    logger: Optional[logging.Logger] = None,
    **auth_params: Any,
) -> Credentials:
    """
    Drive the browser consent step through a one-shot loopback receiver.

    Ports are tried in order; only "address in use"/"permission denied" on
    bind moves on to the next one. Blocks until the redirect arrives.
    """
    logger = logger or Logger().build()
    last_exc: Optional[OSError] = None
    for port in ports:
        try:
            log_event(logger, "consent_start", level=logging.DEBUG, host=host, port=port)
            return flow.run_local_server(host=host, port=port, open_browser=open_browser, **auth_params)
        except OSError as e:
            if e.errno not in _BUSY_PORT_ERRNOS:
                raise
            log_event(logger, "consent_port_unavailable", port=port, error=str(e))
            last_exc = e
    if last_exc is None:
        raise ValueError("No loopback ports configured.")
    raise last_exc


def load_or_authorize(
    client_secret_path: Path,
    store: TokenStore,
    identity: str,
    scopes: Iterable[str],
    host: str,
    ports: Iterable[int],
    open_browser: bool = True,
    logger: Optional[logging.Logger] = None,
    **auth_params: Any,
) -> Credentials:
    """Cached credentials for `identity`, or fresh ones from the consent flow (then cached)."""
    # Google may hand back previously granted scopes alongside ours
    os.environ.setdefault("OAUTHLIB_RELAX_TOKEN_SCOPE", "1")

    scopes = list(scopes)
    creds = store.load(identity, scopes)
    if creds is not None:
        return creds

    flow = InstalledAppFlow.from_client_secrets_file(str(client_secret_path), scopes=scopes)
    creds = run_consent(
        flow,
        host=host,
        ports=ports,
        open_browser=open_browser,
        logger=logger,
        access_type="offline",
        **auth_params,
    )
    store.save(identity, creds)
    return creds


def get_gmail_service(cfg: MailConfig):
    """
    Returns an authenticated Gmail API service.

    Uses installed-app OAuth flow with a localhost redirect.
    Tokens are cached under cfg.identity in the shared token directory.
    """
    logger = Logger().build()
    client_path = Path(cfg.client_secret_path) if cfg.client_secret_path else locate(cfg.client_secret_name)
    if not client_path.exists():
        raise ClientSecretNotFoundError(f"Missing OAuth client file at '{client_path}'.")

    store = TokenStore(resolve_tokens_dir(cfg.tokens_dir_name, cfg.tokens_dir), logger=logger)
    creds = load_or_authorize(
        client_path,
        store,
        identity=cfg.identity,
        scopes=cfg.scopes,
        host=cfg.host,
        ports=cfg.ports,
        logger=logger,
    )
    return build("gmail", "v1", credentials=creds, cache_discovery=False)
