from __future__ import annotations

import sys
from importlib import resources
from pathlib import Path
from typing import Callable, Iterable, Optional

Resolver = Callable[[str], Optional[Path]]


class ClientSecretNotFoundError(FileNotFoundError):
    """Raised when no resolver can find the OAuth client JSON."""


def executable_dir() -> Optional[Path]:
    """
    Directory holding the running program.

    For a frozen build (PyInstaller and friends) that is the directory of the
    executable; otherwise the directory of the `__main__` script, if any.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    main_file = getattr(sys.modules.get("__main__"), "__file__", None)
    if not main_file:
        return None
    return Path(main_file).resolve().parent


def bundle_dir() -> Path:
    """Frozen bundle root, or the `resources` folder shipped inside this package."""
    meipass = getattr(sys, "_MEIPASS", None)
    if meipass:
        return Path(meipass)
    return Path(str(resources.files(__package__ or "tools") / "resources"))


def in_directory(get_dir: Callable[[], Optional[Path]]) -> Resolver:
    def resolve(name: str) -> Optional[Path]:
        base = get_dir()
        if base is None:
            return None
        candidate = Path(base) / name
        return candidate if candidate.is_file() else None

    return resolve


def default_resolvers() -> list[Resolver]:
    # Looked up at call time so a packaged build (or a test) sees its own dirs
    return [
        in_directory(Path.cwd),
        in_directory(lambda: executable_dir()),
        in_directory(lambda: bundle_dir()),
    ]


def locate(name: str, resolvers: Optional[Iterable[Resolver]] = None) -> Path:
    """Return the first hit among `resolvers` (cwd, executable dir, bundle by default)."""
    for resolver in resolvers if resolvers is not None else default_resolvers():
        found = resolver(name)
        if found is not None:
            return found
    raise ClientSecretNotFoundError(
        f"Missing {name}. Place it next to the executable or in the working directory."
    )


def tokens_dir_candidates(dirname: str) -> list[Path]:
    """Executable-adjacent token dir first, then the plain relative one."""
    out: list[Path] = []
    exe = executable_dir()
    if exe is not None:
        out.append(exe / dirname)
    rel = Path(dirname)
    if all(p.resolve() != rel.resolve() for p in out):
        out.append(rel)
    return out


def resolve_tokens_dir(dirname: str, override: Optional[Path] = None) -> Path:
    path = Path(override) if override is not None else tokens_dir_candidates(dirname)[0]
    path.mkdir(parents=True, exist_ok=True)
    return path
