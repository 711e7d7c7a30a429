import logging
import sys
from typing import Iterable

_NOISY_LOGGERS = ("uvicorn.access", "httpx", "asyncio")


def setup_logging(level: str = "INFO", quiet: Iterable[str] = _NOISY_LOGGERS) -> None:
    """
    Configure centralized logging for the billing service.

    Loggers listed in ``quiet`` are held at WARNING so per-request chatter
    does not drown the billing events.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
