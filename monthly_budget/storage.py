"""Budget storage and file I/O operations.

All months live in one JSON document that is rewritten in full on every
save. Documents without a ``version`` field are the browser layout (a bare
mapping of month key to record) and are migrated on load.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

from .config import STORE_PATH
from .exceptions import InvalidMonthKey
from .models import MonthRecord
from .months import validate_month_key

logger = logging.getLogger(__name__)

FORMAT_VERSION = 2


def serialize_months(months: Dict[str, MonthRecord]) -> Dict[str, Any]:
    """Build the JSON payload for a month mapping."""
    return {
        'version': FORMAT_VERSION,
        'months': {key: months[key].to_dict() for key in sorted(months)},
    }


def deserialize_months(payload: Any) -> Dict[str, MonthRecord]:
    """Rebuild a month mapping from a payload of any known version.

    Raises:
        ValueError: If the payload is not a mapping or has an unknown version
    """
    if not isinstance(payload, dict):
        raise ValueError("Budget data must be a JSON object")

    if 'version' in payload:
        version = payload['version']
        if version != FORMAT_VERSION:
            raise ValueError(f"Unsupported budget data version: {version!r}")
        entries = payload.get('months') or {}
    else:
        # Version 1: a bare month key -> record mapping
        entries = payload

    months: Dict[str, MonthRecord] = {}
    for key, record in entries.items():
        try:
            validate_month_key(key)
        except InvalidMonthKey:
            logger.warning("Skipping record with invalid month key %r", key)
            continue
        if not isinstance(record, dict):
            logger.warning("Skipping malformed record for %s", key)
            continue
        months[key] = MonthRecord.from_dict(record)
    return months


class BudgetFileStorage:
    """Handles reading and writing the budget data file."""

    def __init__(self, path: Optional[Path] = None):
        """Initialize budget storage.

        Args:
            path: Optional custom location for the data file.
                  Defaults to STORE_PATH from config.
        """
        self.path = Path(path) if path is not None else STORE_PATH

    def load(self) -> Dict[str, MonthRecord]:
        """Load every month from disk.

        Returns:
            Dictionary mapping month keys to records. Empty when the file is
            missing.

        Note:
            A corrupt file is copied to ``<name>.corrupt`` and an empty
            mapping is returned, so the next save cannot destroy it.
        """
        if not self.path.exists():
            return {}

        try:
            with self.path.open('r', encoding='utf-8') as handle:
                payload = json.load(handle)
            return deserialize_months(payload)
        except (json.JSONDecodeError, ValueError, KeyError, TypeError, AttributeError, OSError) as e:
            logger.warning("Could not load budget data from %s: %s", self.path, e)
            self._preserve_corrupt_file()
            return {}

    def save(self, months: Dict[str, MonthRecord]) -> None:
        """Write every month to disk, replacing the previous file.

        Raises:
            OSError: If the file cannot be written
        """
        payload = serialize_months(months)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        try:
            with tmp_path.open('w', encoding='utf-8') as handle:
                json.dump(payload, handle, indent=2, sort_keys=True, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        finally:
            if tmp_path.exists():
                tmp_path.unlink()

    def _preserve_corrupt_file(self) -> None:
        backup = self.path.with_name(self.path.name + '.corrupt')
        try:
            shutil.copy2(self.path, backup)
        except OSError as e:
            logger.error("Could not back up unreadable file %s: %s", self.path, e)
        else:
            logger.warning("Unreadable budget data copied to %s", backup)
