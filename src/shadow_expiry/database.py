"""Account database access: shadow-format parsing and the database backends."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any, Protocol

from shadow_expiry.errors import DatabaseUnavailableError
from shadow_expiry.models import AccountPolicyRecord
from shadow_expiry.primitives import parse_field, safe_list

logger = logging.getLogger(__name__)

DEFAULT_SHADOW_PATH = "/etc/shadow"

# login:password:lastchg:min:max:warn:inactive:expire[:reserved]
_MIN_SHADOW_FIELDS = 8


class AccountDatabase(Protocol):
    def lookup(self, login: str) -> AccountPolicyRecord | None: ...

    def list_all(self) -> list[AccountPolicyRecord]: ...

    def logins(self) -> list[str]: ...


def login_key(line: str) -> str | None:
    """Return the login id of a shadow line, or None when the line has no key."""
    line = str(line or "").strip()
    if not line or line.startswith("#") or ":" not in line:
        return None
    return line.split(":", 1)[0] or None


def parse_shadow_line(line: str) -> AccountPolicyRecord | None:
    """Parse one shadow line into its policy record. Returns None if malformed."""
    line = str(line or "").strip()
    key = login_key(line)
    if key is None:
        return None

    parts = line.split(":")
    if len(parts) < _MIN_SHADOW_FIELDS:
        logger.debug("Shadow entry for %s has %d fields, expected at least %d", key, len(parts), _MIN_SHADOW_FIELDS)
        return None

    try:
        return AccountPolicyRecord(
            login=key,
            last_changed_day=parse_field(parts[2]),
            min_days=parse_field(parts[3]),
            max_days=parse_field(parts[4]),
            warn_days=parse_field(parts[5]),
            inactive_days=parse_field(parts[6]),
            expire_day=parse_field(parts[7]),
        )
    except ValueError:
        logger.debug("Shadow entry for %s has non-numeric or out-of-range policy fields", key)
        return None


class InMemoryDatabase:
    """An account database held entirely in memory, in insertion order."""

    def __init__(self, records: Iterable[AccountPolicyRecord] = ()) -> None:
        self._keys: list[str] = []
        self._records: dict[str, AccountPolicyRecord] = {}
        self.skipped = 0
        for record in records:
            self._add_key(record.login)
            self._records.setdefault(record.login, record)

    @classmethod
    def from_lines(cls, lines: Iterable[Any]) -> "InMemoryDatabase":
        db = cls()
        db._load_lines(lines)
        return db

    @classmethod
    def from_dicts(cls, entries: Iterable[Any]) -> "InMemoryDatabase":
        """Build a database from plain mappings, e.g. a YAML fixture."""
        return cls(AccountPolicyRecord.model_validate(e) for e in safe_list(entries) if isinstance(e, dict))

    def _add_key(self, login: str) -> None:
        if login in self._keys:
            logger.debug("Duplicate entry for %s ignored", login)
            return
        self._keys.append(login)

    def _load_lines(self, lines: Iterable[Any]) -> None:
        for line in lines:
            line = str(line or "").strip()
            if not line or line.startswith("#"):
                continue
            key = login_key(line)
            if key is None:
                logger.debug("Skipping malformed shadow line without a login field")
                self.skipped += 1
                continue
            self._add_key(key)
            record = parse_shadow_line(line)
            if record is None:
                self.skipped += 1
                continue
            self._records.setdefault(key, record)

    def lookup(self, login: str) -> AccountPolicyRecord | None:
        return self._records.get(login)

    def list_all(self) -> list[AccountPolicyRecord]:
        return [self._records[k] for k in self._keys if k in self._records]

    def logins(self) -> list[str]:
        return list(self._keys)

    def __iter__(self) -> Iterator[str]:
        return iter(self.logins())

    def __len__(self) -> int:
        return len(self._keys)


class ShadowFileDatabase(InMemoryDatabase):
    """
    The host shadow file, read once on first use.

    With strict=False an unreadable file behaves like an empty database and a
    warning is logged. With strict=True it raises DatabaseUnavailableError.
    """

    def __init__(self, path: str = DEFAULT_SHADOW_PATH, strict: bool = False) -> None:
        super().__init__()
        self.path = str(path)
        self.strict = strict
        self.available = True
        self._loaded = False

    def load(self) -> None:
        self._keys = []
        self._records = {}
        self.skipped = 0
        try:
            with open(self.path, encoding="utf-8", errors="replace") as f:
                self._load_lines(f)
        except OSError as exc:
            self.available = False
            self._keys = []
            self._records = {}
            reason = exc.strerror or str(exc)
            if self.strict:
                raise DatabaseUnavailableError(self.path, reason) from exc
            logger.warning("Cannot read %s (%s); reporting no accounts", self.path, reason)
        else:
            self.available = True
            logger.debug("Loaded %d entries from %s (%d skipped)", len(self._keys), self.path, self.skipped)
        self._loaded = True

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def lookup(self, login: str) -> AccountPolicyRecord | None:
        self._ensure_loaded()
        return super().lookup(login)

    def list_all(self) -> list[AccountPolicyRecord]:
        self._ensure_loaded()
        return super().list_all()

    def logins(self) -> list[str]:
        self._ensure_loaded()
        return super().logins()

    def __len__(self) -> int:
        self._ensure_loaded()
        return super().__len__()
