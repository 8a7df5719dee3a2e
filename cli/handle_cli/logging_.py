from __future__ import annotations

import logging


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    # request lines from httpx only show up with -v
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(level)
