"""
Configuration provider with remote -> local store -> defaults fallback.

The provider exposes a single observable state, the current
``ConfigSnapshot``. ``refresh()`` is the only transition: it resolves a new
snapshot through the fallback chain and swaps it in as a whole. Readers
always get a complete snapshot, either the old one or the new one.
"""

import copy
import csv
import socket
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..errors import ConfigFetchError
from ..logging.config import get_config_logger, log_config_transition
from ..persistence.config_store import LocalConfigStore
from .defaults import CalculatorConfig
from .loader import ConfigLoader
from .sheet import parse_sheet_csv
from .validation import ConfigValidator

logger = get_config_logger(__name__)

PLACEHOLDER_SHEET_ID = "YOUR_SHEET_ID_HERE"


class ConfigSource(str, Enum):
    """Where the resident configuration snapshot came from."""
    DEFAULTS = "defaults"
    REMOTE = "remote"
    LOCAL = "local"
    SAVED = "saved"


@dataclass(frozen=True)
class ConfigSnapshot:
    """Immutable configuration snapshot consumed by the calculators."""
    config: CalculatorConfig
    source: ConfigSource
    loaded_at: datetime


def fetch_sheet(url: str, timeout_seconds: float) -> str:
    """
    Download the configuration sheet CSV export.

    Raises:
        ConfigFetchError: If the URL is not configured or the request fails
    """
    if not url or PLACEHOLDER_SHEET_ID in url:
        raise ConfigFetchError("Configuration sheet URL not configured", url=url)

    req = Request(url, headers={'User-Agent': 'tradecalc-app/1.0'})

    try:
        with urlopen(req, timeout=timeout_seconds) as response:
            response_code = response.getcode()
            body = response.read().decode('utf-8')
    except HTTPError as e:
        raise ConfigFetchError(f"HTTP {e.code}: {e.reason}", url=url, status_code=e.code) from e
    except (OSError, URLError, socket.timeout) as e:
        raise ConfigFetchError(f"Network error: {str(e)}", url=url) from e

    if not 200 <= response_code < 300:
        raise ConfigFetchError(f"HTTP {response_code}", url=url, status_code=response_code)

    return body


def _without_fields(overrides: dict, field_paths: list[str]) -> tuple[dict, list[str]]:
    """
    Copy overrides with the given dotted fields removed.

    Returns:
        The pruned copy and the paths that were actually present
    """
    pruned = copy.deepcopy(overrides)
    dropped = []

    for path in field_paths:
        *parents, leaf = path.split(".")
        current = pruned
        for key in parents:
            current = current.get(key)
            if not isinstance(current, dict):
                break
        else:
            if leaf in current:
                del current[leaf]
                dropped.append(path)

    return pruned, dropped


class ConfigProvider:
    """Resolves and holds the current configuration snapshot."""

    def __init__(
        self,
        loader: Optional[ConfigLoader] = None,
        store: Optional[LocalConfigStore] = None,
        fetcher: Callable[[str, float], str] = fetch_sheet,
        clock: Callable[[], float] = time.time,
    ):
        self.loader = loader or ConfigLoader.create()
        self._base = self.loader.base_config()
        self._fetch = fetcher
        self._clock = clock

        source = self._base.source
        if store is None and source.use_local_storage:
            store = LocalConfigStore(
                source.local_store_path,
                max_age_seconds=source.local_store_max_age_seconds,
                clock=clock,
            )
        self.store = store

        self._refresh_lock = threading.Lock()
        self._last_fetch_time: Optional[float] = None
        self._snapshot = self._make_snapshot(self._base, ConfigSource.DEFAULTS)

    @property
    def snapshot(self) -> ConfigSnapshot:
        """The resident snapshot; never blocks on a refresh in flight."""
        return self._snapshot

    @property
    def config(self) -> CalculatorConfig:
        return self._snapshot.config

    def refresh(self) -> ConfigSnapshot:
        """
        Resolve a configuration through the fallback chain and install it.

        Order: fresh in-memory copy (when caching is enabled), remote sheet,
        local store (if younger than its max age), built-in defaults.
        """
        with self._refresh_lock:
            if self._cache_is_valid():
                logger.debug("Using cached remote config")
                return self._snapshot

            snapshot = self._load_remote()
            if snapshot is None:
                snapshot = self._load_local()
            if snapshot is None:
                snapshot = self._make_snapshot(self._base, ConfigSource.DEFAULTS)

            self._replace(snapshot, trigger="refresh")
            return snapshot

    def refresh_in_background(self) -> threading.Thread:
        """Run ``refresh`` on a daemon thread and return the thread."""
        thread = threading.Thread(
            target=self.refresh, name="tradecalc-config-refresh", daemon=True
        )
        thread.start()
        return thread

    def save(self, config: CalculatorConfig) -> ConfigSnapshot:
        """Install a caller-provided configuration and persist it locally."""
        with self._refresh_lock:
            snapshot = self._make_snapshot(config, ConfigSource.SAVED)
            self._replace(snapshot, trigger="save")
            if self.store is not None:
                self.store.save(self.loader.to_dict(config))
            return snapshot

    def reset_to_defaults(self) -> ConfigSnapshot:
        """Drop any fetched or saved configuration and the local copy."""
        with self._refresh_lock:
            snapshot = self._make_snapshot(self._base, ConfigSource.DEFAULTS)
            self._replace(snapshot, trigger="reset")
            self._last_fetch_time = None
            if self.store is not None:
                self.store.clear()
            return snapshot

    def _cache_is_valid(self) -> bool:
        source = self._base.source
        if not source.use_cache or self._last_fetch_time is None:
            return False
        if self._snapshot.source is not ConfigSource.REMOTE:
            return False
        return self._clock() - self._last_fetch_time < source.cache_duration_seconds

    def _load_remote(self) -> Optional[ConfigSnapshot]:
        source = self._base.source

        try:
            csv_text = self._fetch(source.sheet_url, source.timeout_seconds)
            overrides = parse_sheet_csv(csv_text)
            config = self._build_validated(overrides, origin="remote", drop_invalid=True)
        except ConfigFetchError as e:
            logger.warning(
                "Failed to fetch remote config",
                url=e.url,
                status_code=e.status_code,
                error=str(e),
                fallback=e.fallback_strategy,
            )
            return None
        except (csv.Error, UnicodeDecodeError) as e:
            logger.warning("Failed to parse remote config", error=str(e))
            return None

        self._last_fetch_time = self._clock()
        if self.store is not None:
            self.store.save(self.loader.to_dict(config))

        return self._make_snapshot(config, ConfigSource.REMOTE)

    def _load_local(self) -> Optional[ConfigSnapshot]:
        if self.store is None:
            return None

        stored = self.store.load()
        if stored is None:
            return None

        try:
            config = self._build_validated(stored, origin="local")
        except ConfigFetchError as e:
            logger.warning("Ignoring invalid local config", error=str(e))
            return None

        return self._make_snapshot(config, ConfigSource.LOCAL)

    def _build_validated(
        self, overrides: dict, origin: str, drop_invalid: bool = False
    ) -> CalculatorConfig:
        merged = self.loader.merge_config(overrides, base=self._base)
        errors = ConfigValidator.validate_config(merged)

        if errors and drop_invalid:
            overrides, dropped = _without_fields(overrides, [err.field for err in errors])
            if dropped:
                logger.warning(
                    "Dropping invalid config values",
                    origin=origin,
                    fields=dropped,
                )
                merged = self.loader.merge_config(overrides, base=self._base)
                errors = ConfigValidator.validate_config(merged)

        if errors:
            error_msgs = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise ConfigFetchError(
                f"Invalid {origin} config: {'; '.join(error_msgs)}",
                fallback_strategy="next_config_tier",
            )

        return self.loader.build_config(overrides, base=self._base)

    def _replace(self, snapshot: ConfigSnapshot, trigger: str) -> None:
        previous = self._snapshot
        self._snapshot = snapshot
        if previous.source is not snapshot.source or trigger != "refresh":
            log_config_transition(
                logger,
                from_source=previous.source.value,
                to_source=snapshot.source.value,
                trigger=trigger,
            )

    def _make_snapshot(self, config: CalculatorConfig, source: ConfigSource) -> ConfigSnapshot:
        return ConfigSnapshot(
            config=config,
            source=source,
            loaded_at=datetime.fromtimestamp(self._clock(), tz=timezone.utc),
        )
