"""
Identity generation for records created inside the core.

Identifiers are a base-36 millisecond timestamp followed by a random base-36
suffix. The timestamp component never goes backwards within a process, even
when the wall clock does.
"""

import secrets
import time
from typing import Callable, Optional

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
_RANDOM_DIGITS = 11


def to_base36(value: int) -> str:
    """Render a non-negative integer in base 36."""
    if value < 0:
        raise ValueError(f"Cannot encode negative value: {value}")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits))


class IdGenerator:
    """Produces timestamp-plus-random identifiers."""

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.time
        self._last_millis = 0

    def _observe_millis(self) -> int:
        now = int(self._clock() * 1000)
        if now < self._last_millis:
            now = self._last_millis
        self._last_millis = now
        return now

    def __call__(self) -> str:
        stamp = to_base36(self._observe_millis())
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(_RANDOM_DIGITS))
        return stamp + suffix


generate_id = IdGenerator()
