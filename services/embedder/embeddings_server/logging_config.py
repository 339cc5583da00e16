from __future__ import annotations

import logging
import sys
from typing import Dict, Tuple


LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _to_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"unknown log level: {name!r}")
    return level


def parse_log_filter(expr: str) -> Tuple[int, Dict[str, int]]:
    """
    Parses a level or filter expression into (root level, per-logger levels).

    "debug"                                -> (DEBUG, {})
    "warning,embeddings_server.pipeline=debug" -> (WARNING, {"embeddings_server.pipeline": DEBUG})
    """
    root = logging.INFO
    per_logger: Dict[str, int] = {}
    for part in expr.split(","):
        part = part.strip()
        if not part:
            continue
        if "=" in part:
            name, _, level = part.partition("=")
            per_logger[name.strip()] = _to_level(level)
        else:
            root = _to_level(part)
    return root, per_logger


def configure_logging(expr: str = "info") -> None:
    try:
        root, per_logger = parse_log_filter(expr)
    except ValueError as e:
        root, per_logger = logging.INFO, {}
        invalid = str(e)
    else:
        invalid = None

    logging.basicConfig(
        level=root,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name, level in per_logger.items():
        logging.getLogger(name).setLevel(level)

    if invalid:
        logging.getLogger(__name__).warning("ignoring LOG_LEVEL=%r (%s), using INFO", expr, invalid)
