import logging
import os
from typing import Any, Optional

from .config import LOG_LEVEL_ENV


def _parse_level(s: Optional[str]) -> Optional[int]:
    if not s:
        return None
    v = str(s).strip().upper()
    if v == "WARN":
        v = "WARNING"
    level = logging.getLevelName(v)
    return level if isinstance(level, int) else None


def setup_logging(args: Any = None, *, name: str = "fruit_slicer") -> None:
    """Configure python logging once.

    Priority (highest first):
    - env FRUIT_SLICER_LOG_LEVEL
    - CLI flags: --quiet / --debug (if present on args)
    - default: INFO
    """
    root = logging.getLogger()
    if root.handlers:
        return

    quiet = bool(getattr(args, "quiet", False))
    debug = bool(getattr(args, "debug", False))

    level = logging.INFO
    if quiet:
        level = logging.WARNING
    if debug:
        level = logging.DEBUG
    env_level = _parse_level(os.environ.get(LOG_LEVEL_ENV))
    if env_level is not None:
        level = env_level

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger(name).debug("logging initialized (level=%s)", logging.getLevelName(level))
