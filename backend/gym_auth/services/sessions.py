import asyncio
import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable

log = logging.getLogger(__name__)


def generate_session_token(nbytes: int = 32) -> str:
    return secrets.token_urlsafe(nbytes)


@dataclass(frozen=True)
class SessionEntry:
    user_id: int
    issued_at: float


class SessionStore:
    def __init__(
        self,
        ttl_seconds: float | None = None,
        token_bytes: int = 32,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: dict[str, SessionEntry] = {}
        self._lock = threading.Lock()
        self._ttl = ttl_seconds
        self._token_bytes = token_bytes
        self._clock = clock
        self._next_sweep = clock() + ttl_seconds if ttl_seconds is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _expired(self, entry: SessionEntry, now: float) -> bool:
        return self._ttl is not None and (now - entry.issued_at) >= self._ttl

    # caller holds self._lock
    def _sweep(self, now: float) -> int:
        stale = [t for t, e in self._entries.items() if self._expired(e, now)]
        for t in stale:
            del self._entries[t]
        self._next_sweep = now + self._ttl
        return len(stale)

    def put(self, token: str, user_id: int) -> None:
        if not token:
            raise ValueError("token_blank")
        with self._lock:
            now = self._clock()
            # at most one full sweep per ttl window
            if self._next_sweep is not None and now >= self._next_sweep:
                self._sweep(now)
            self._entries[token] = SessionEntry(user_id=int(user_id), issued_at=now)

    def get(self, token: str) -> int | None:
        if not token:
            return None
        with self._lock:
            entry = self._entries.get(token)
            if entry is None:
                return None
            if self._expired(entry, self._clock()):
                del self._entries[token]
                return None
            return entry.user_id

    def delete(self, token: str) -> bool:
        with self._lock:
            return self._entries.pop(token, None) is not None

    def create(self, user_id: int) -> str:
        token = generate_session_token(self._token_bytes)
        self.put(token, user_id)
        return token

    def purge_expired(self) -> int:
        if self._ttl is None:
            return 0
        with self._lock:
            return self._sweep(self._clock())


async def session_sweep_loop(store: SessionStore, interval_seconds: float) -> None:
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            dropped = store.purge_expired()
            if dropped:
                log.info("session sweep dropped=%s remaining=%s", dropped, len(store))
        except Exception:
            log.exception("session sweep failed")
