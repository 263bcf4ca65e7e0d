"""Bundled coefficient tables (JSON) and their one-time loader."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Parsed tables, loaded once per process.
_loaded: dict[str, Any] = {}


def _data_root() -> Path:
    """Return the path to the bundled data directory (nearsky.data)."""
    from importlib import resources

    return Path(resources.files('nearsky.data'))


def load_table(name: str) -> Any:
    """Return the parsed JSON table `name` (e.g. 'vsop87'), loading it on first use.

    Parameters:
        name: File stem under nearsky/data.

    Returns:
        Parsed JSON document. Callers must treat it as read-only.

    Raises:
        FileNotFoundError: If no such table is bundled.
    """
    table = _loaded.get(name)
    if table is None:
        path = _data_root() / f'{name}.json'
        with path.open(encoding='utf-8') as f:
            table = json.load(f)
        logger.debug('Loaded coefficient table %s from %s', name, path)
        _loaded[name] = table
    return table
