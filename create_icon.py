from __future__ import annotations

import sys
import traceback
from pathlib import Path

from config.icon_config import IconConfig
from tools.icon_renderer import write_icons
from utils.logger import Logger, log_event


def main(out_dir: Path = Path(".")) -> int:
    logger = Logger().build()
    try:
        written = write_icons(out_dir, IconConfig())
    except Exception:
        traceback.print_exc()
        return 1

    log_event(logger, "icons_written", paths=[str(p) for p in written])
    print("Created icon files: " + ", ".join(p.name for p in written))
    return 0


if __name__ == "__main__":
    sys.exit(main())
