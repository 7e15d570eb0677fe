"""Collision-resistant task ids.

Ids look like ``c`` + timestamp + counter + fingerprint + random, all in
lowercase base36. Within one process they sort in creation order.
"""

import hashlib
import os
import secrets
import socket
import threading
import time


ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
BLOCK_SIZE = 4
TIMESTAMP_SIZE = 8
RANDOM_SIZE = 8
COUNTER_LIMIT = len(ALPHABET) ** BLOCK_SIZE


def to_base36(number: int) -> str:
    """Encode a non-negative integer in lowercase base36."""
    if number < 0:
        msg = "base36 encoding needs a non-negative integer"
        raise ValueError(msg)
    if number == 0:
        return "0"
    digits: list[str] = []
    while number:
        number, rem = divmod(number, len(ALPHABET))
        digits.append(ALPHABET[rem])
    return "".join(reversed(digits))


def _pad(value: str, size: int) -> str:
    return value.rjust(size, "0")[-size:]


def _host_fingerprint() -> str:
    raw = f"{os.getpid()}:{socket.gethostname()}".encode()
    digest = int(hashlib.sha256(raw).hexdigest(), 16)
    return _pad(to_base36(digest), BLOCK_SIZE)


class IdGenerator:
    """Thread-safe generator of opaque task ids."""

    def __init__(self, fingerprint: str | None = None) -> None:
        self._lock = threading.Lock()
        self._counter = 0
        self._fingerprint = fingerprint or _host_fingerprint()

    def __repr__(self) -> str:
        """String representation with the host fingerprint."""
        return f"<{self.__class__.__name__} fingerprint='{self._fingerprint}'>"

    def _next_count(self) -> int:
        with self._lock:
            count = self._counter
            self._counter = (self._counter + 1) % COUNTER_LIMIT
            return count

    def __call__(self) -> str:
        """Return a fresh id."""
        timestamp = _pad(to_base36(int(time.time() * 1000)), TIMESTAMP_SIZE)
        counter = _pad(to_base36(self._next_count()), BLOCK_SIZE)
        random_block = _pad(
            to_base36(secrets.randbelow(len(ALPHABET) ** RANDOM_SIZE)), RANDOM_SIZE
        )
        return f"c{timestamp}{counter}{self._fingerprint}{random_block}"


new_task_id = IdGenerator()
