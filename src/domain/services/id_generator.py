"""Task identifier generation."""

import random
import string
import time
from collections.abc import Callable
from typing import Protocol
from uuid import uuid4

_SUFFIX_ALPHABET = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 9


class IIdGenerator(Protocol):
    """Produces identifiers for new tasks."""

    def new_id(self) -> str:
        ...


class TimestampIdGenerator:
    """``task_<epoch millis>_<9 base-36 chars>`` identifiers.

    Unique within the process for practical purposes: the millisecond stamp
    never goes backwards, and the random suffix separates ids minted in the
    same millisecond. Collisions are improbable, not impossible.
    """

    def __init__(
        self,
        clock_ms: Callable[[], int] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._rng = rng or random.Random()
        self._last_ms = 0

    def new_id(self) -> str:
        now_ms = max(self._clock_ms(), self._last_ms)
        self._last_ms = now_ms
        suffix = "".join(self._rng.choices(_SUFFIX_ALPHABET, k=_SUFFIX_LENGTH))
        return f"task_{now_ms}_{suffix}"


class UuidIdGenerator:
    """Random uuid4 identifiers (hex form)."""

    def new_id(self) -> str:
        return uuid4().hex


def build_id_generator(strategy: str) -> IIdGenerator:
    """Return the generator configured by ``strategy`` (``timestamp`` or ``uuid``)."""
    if strategy == "uuid":
        return UuidIdGenerator()
    if strategy == "timestamp":
        return TimestampIdGenerator()
    raise ValueError(f"Unknown id strategy: {strategy}")
