"""Note identifiers and timestamps."""

import random
import time

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def now() -> int:
    """Current wall-clock time in milliseconds since epoch."""
    return int(time.time() * 1000)


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def new_id() -> str:
    """Generate a note ID: base-36 timestamp plus a random suffix.

    Unique with overwhelming probability on one device. Not suitable
    for anything security-related.
    """
    suffix = "".join(random.choices(_BASE36, k=8))
    return f"{_to_base36(now())}-{suffix}"
