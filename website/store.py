import json
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from django.core.cache import caches

from .exceptions import StorageDecodeError, StorageWriteError, WriteConflict

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400


class Precedence(Enum):
    """Which tier a read consults first."""
    SHORT_LIVED_FIRST = "short_lived_first"
    DURABLE_FIRST = "durable_first"


@dataclass(frozen=True)
class Versioned:
    value: Optional[str]
    version: int


class DualStore:
    """
    Uniform read/write/delete over two persistence tiers.

    The durable tier keeps ``(value, version)`` pairs that never expire. The
    short-lived tier keeps plain strings with a per-key expiry and acts as a
    mirror of durable values.

    Every write lands in the durable tier and bumps that key's version. Writes
    given ``ttl_days`` are mirrored to the short-lived tier as well; a
    non-positive ``ttl_days`` expires the mirror immediately. A write is
    all-or-nothing: when the mirror rejects the value the durable entry is
    rolled back before ``StorageWriteError`` is raised.

    Reads follow ``precedence``. With the default ``SHORT_LIVED_FIRST`` an
    unexpired mirror wins and the durable tier is the fallback;
    ``DURABLE_FIRST`` reverses that.

    Keys are scoped by ``namespace`` so two clients never see each other's
    values. Values are opaque strings; callers own encoding, see ``decode_json``.
    """

    def __init__(self, namespace: str = "default", durable_alias: str = "durable",
                 short_lived_alias: str = "default",
                 precedence: Precedence = Precedence.SHORT_LIVED_FIRST):
        self.namespace = namespace
        self.durable = caches[durable_alias]
        self.short_lived = caches[short_lived_alias]
        self.precedence = precedence

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def read(self, key: str, precedence: Optional[Precedence] = None) -> Optional[str]:
        precedence = precedence or self.precedence
        if precedence is Precedence.SHORT_LIVED_FIRST:
            tiers = (self.read_short_lived, self.read_durable)
        else:
            tiers = (self.read_durable, self.read_short_lived)

        for read_tier in tiers:
            value = read_tier(key)
            if value is not None:
                return value
        return None

    def read_durable(self, key: str) -> Optional[str]:
        return self.read_versioned(key).value

    def read_short_lived(self, key: str) -> Optional[str]:
        return self.short_lived.get(self._key(key))

    def read_versioned(self, key: str) -> Versioned:
        """Durable value plus the version a conditional write must present."""
        entry = self.durable.get(self._key(key))
        if entry is None:
            return Versioned(None, 0)
        value, version = entry
        return Versioned(value, version)

    def write(self, key: str, value: str, ttl_days: Optional[int] = None,
              expected_version: Optional[int] = None) -> int:
        """
        Store ``value`` and return the new durable version.

        Raises ``WriteConflict`` when ``expected_version`` is given and the
        durable tier has moved past it, ``StorageWriteError`` when a tier
        rejects the value.
        """
        if not isinstance(value, str):
            raise StorageWriteError(key, TypeError(f"values must be str, got {type(value).__name__}"))

        current = self.read_versioned(key)
        if expected_version is not None and current.version != expected_version:
            raise WriteConflict(key, expected_version, current.version)

        cache_key = self._key(key)
        version = current.version + 1
        try:
            self.durable.set(cache_key, (value, version), timeout=None)
        except Exception as e:
            raise StorageWriteError(key, e) from e

        if ttl_days is not None:
            try:
                if ttl_days > 0:
                    self.short_lived.set(cache_key, value, timeout=ttl_days * SECONDS_PER_DAY)
                else:
                    self.short_lived.delete(cache_key)
            except Exception as e:
                # the write is all-or-nothing: put the durable entry back
                self._restore(cache_key, current)
                raise StorageWriteError(key, e) from e

        logger.debug("Stored %s (version %s, ttl_days=%s)", cache_key, version, ttl_days)
        return version

    def _restore(self, cache_key: str, previous: Versioned) -> None:
        if previous.value is None:
            self.durable.delete(cache_key)
        else:
            self.durable.set(cache_key, (previous.value, previous.version), timeout=None)
        logger.warning("Rolled %s back to version %s", cache_key, previous.version)

    def delete(self, key: str) -> None:
        cache_key = self._key(key)
        self.durable.delete(cache_key)
        self.short_lived.delete(cache_key)


def decode_json(key: str, raw: Optional[str]) -> Any:
    """
    Decode a stored JSON value. ``None`` means the key is absent.
    Raises ``StorageDecodeError`` for anything unparseable.
    """
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise StorageDecodeError(key, e) from e


def encode_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))
