from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IconConfig:
    # All drawing coordinates are expressed on this canvas
    master_size: int = 256
    # Draw at N x the master size, then reduce, for smooth edges
    supersample: int = 4

    master_name: str = "app-icon.png"
    # (file name, edge length) for the downsampled copies
    variants: tuple[tuple[str, int], ...] = (
        ("app-icon-64.png", 64),
        ("app-icon-32.png", 32),
    )
