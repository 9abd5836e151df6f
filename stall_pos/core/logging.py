import logging

from stall_pos.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | None = None) -> None:
    root = logging.getLogger("stall_pos")
    root.setLevel((level or settings.LOG_LEVEL).upper())

    # Called again on reload; keep a single handler.
    if any(getattr(h, "_stall_pos", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._stall_pos = True
    root.addHandler(handler)
