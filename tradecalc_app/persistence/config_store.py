"""Local fallback store for the last successfully fetched configuration."""

import json
import threading
import time
from pathlib import Path
from typing import Any, Callable, Optional

from ..errors import PersistenceError
from ..logging.config import get_config_logger

logger = get_config_logger(__name__)


class LocalConfigStore:
    """
    JSON file holding a single ``{config, timestamp}`` record.

    The timestamp is in epoch milliseconds. Records older than
    ``max_age_seconds`` are treated as absent. Read and write failures
    are logged and never propagate to callers.
    """

    def __init__(
        self,
        path: str,
        max_age_seconds: int = 24 * 60 * 60,
        clock: Callable[[], float] = time.time,
    ):
        self.path = Path(path).expanduser()
        self.max_age_seconds = max_age_seconds
        self._clock = clock
        self._lock = threading.Lock()

    def save(self, config: dict[str, Any]) -> bool:
        """Persist a configuration dict with the current timestamp."""
        record = {
            "config": config,
            "timestamp": int(self._clock() * 1000),
        }

        try:
            with self._lock:
                self._write(record)
        except PersistenceError as e:
            logger.warning(
                "Failed to save config to local store",
                path=str(self.path),
                error=str(e),
            )
            return False

        return True

    def load(self) -> Optional[dict[str, Any]]:
        """Return the stored configuration, or None if missing, stale or unreadable."""
        if not self.path.exists():
            return None

        try:
            with self._lock:
                record = json.loads(self.path.read_text(encoding="utf-8"))
            config = record["config"]
            timestamp = float(record["timestamp"])
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(
                "Failed to read config from local store",
                path=str(self.path),
                error=str(e),
            )
            return None

        age_seconds = self._clock() - timestamp / 1000
        if age_seconds >= self.max_age_seconds:
            logger.info(
                "Local config store is stale",
                path=str(self.path),
                age_seconds=round(age_seconds),
            )
            return None

        if not isinstance(config, dict):
            return None

        return config

    def clear(self) -> None:
        """Remove the stored record."""
        try:
            with self._lock:
                self.path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(
                "Failed to clear local config store",
                path=str(self.path),
                error=str(e),
            )

    def _write(self, record: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(record, ensure_ascii=False), encoding="utf-8")
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(
                f"Could not write local config store: {e}",
                operation="save",
                target=str(self.path),
            ) from e
