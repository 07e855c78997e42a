# ABOUTME: Session state for the session-gated Weathercloud endpoints.
# ABOUTME: Holds the cookie set and remembered credentials, with optional JSON-file persistence.

import logging
import os
import threading
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from weathercloud.models import Credentials

logger = logging.getLogger(__name__)


class StoredSession(BaseModel):
    """What a CredentialStore persists between process runs."""

    cookies: list[tuple[str, str]] = []
    credentials: Credentials | None = None


@runtime_checkable
class CredentialStore(Protocol):
    def load(self) -> StoredSession | None: ...

    def save(self, stored: StoredSession) -> None: ...

    def clear(self) -> None: ...


class JsonCredentialStore:
    """Keeps a StoredSession in a JSON file readable only by the current user."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> StoredSession | None:
        if not self.path.exists():
            return None
        return StoredSession.model_validate_json(self.path.read_text(encoding="utf-8"))

    def save(self, stored: StoredSession) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(stored.model_dump_json(indent=2), encoding="utf-8")
        os.chmod(self.path, 0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


def parse_set_cookie(header: str) -> tuple[str, str] | None:
    """Return the (name, value) pair of a Set-Cookie header, ignoring its attributes."""
    pair = header.split(";", 1)[0].strip()
    name, sep, value = pair.partition("=")
    name = name.strip()
    if not sep or not name:
        return None
    return name, value.strip()


class Session:
    """Cookie set and remembered credentials shared by every session-aware operation.

    The cookie set is only ever replaced as a whole, under a lock, so readers see either
    the previous set or the new one.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._cookies: tuple[tuple[str, str], ...] = ()
        self._credentials: Credentials | None = None

    @property
    def cookies(self) -> tuple[tuple[str, str], ...]:
        with self._lock:
            return self._cookies

    @property
    def credentials(self) -> Credentials | None:
        with self._lock:
            return self._credentials

    def get_cookies(self) -> tuple[tuple[str, str], ...]:
        return self.cookies

    def cookie_header(self) -> str:
        """Render the current cookies as a Cookie request header value."""
        return "; ".join(f"{name}={value}" for name, value in self.cookies)

    def set_cookies(self, raw_headers: Iterable[str], mail: str | None = None, password: str | None = None) -> bool:
        """Replace the cookie set with the cookies parsed from raw Set-Cookie headers.

        Credentials are remembered only when both mail and password are given. Returns
        False, leaving the session untouched, when no cookie can be parsed.
        """
        parsed = {}
        for header in raw_headers:
            pair = parse_set_cookie(header)
            if pair is not None:
                parsed[pair[0]] = pair[1]
        if not parsed:
            logger.debug("No cookie found in Set-Cookie headers")
            return False

        credentials = Credentials(mail=mail, password=password) if mail and password else None
        with self._lock:
            self._cookies = tuple(parsed.items())
            self._credentials = credentials
        logger.debug("Session replaced with %d cookies", len(parsed))
        return True

    def clear(self) -> None:
        with self._lock:
            self._cookies = ()
            self._credentials = None

    def load(self, store: CredentialStore) -> bool:
        """Restore cookies and credentials from a store. Returns False if it holds nothing."""
        stored = store.load()
        if stored is None or not stored.cookies:
            return False
        with self._lock:
            self._cookies = tuple(tuple(pair) for pair in stored.cookies)
            self._credentials = stored.credentials
        logger.info("Restored session with %d cookies", len(stored.cookies))
        return True

    def save(self, store: CredentialStore) -> None:
        with self._lock:
            stored = StoredSession(cookies=list(self._cookies), credentials=self._credentials)
        store.save(stored)
