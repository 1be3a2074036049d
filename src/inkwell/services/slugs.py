"""Slug derivation for post URLs.

A slug is the lower-cased title with every run of characters outside
[a-z0-9] collapsed to one hyphen, followed by a disambiguator built from
the creation time (milliseconds, base 36) and four random base-36
characters. Two posts with the same title therefore get different
slugs without any lookup-and-retry loop.
"""

import re
import secrets
import time
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
MAX_BASE_LENGTH = 200


def slugify(title: str) -> str:
    """'Hello, World!' -> 'hello-world'. Empty input gives 'post'."""
    base = _NON_ALNUM.sub("-", title.lower()).strip("-")
    base = base[:MAX_BASE_LENGTH].rstrip("-")
    return base or "post"


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding needs a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


def disambiguator(now_ms: Optional[int] = None) -> str:
    stamp = to_base36(now_ms if now_ms is not None else time.time_ns() // 1_000_000)
    noise = "".join(secrets.choice(_ALPHABET) for _ in range(4))
    return f"{stamp}{noise}"


def make_slug(title: str, now_ms: Optional[int] = None) -> str:
    return f"{slugify(title)}-{disambiguator(now_ms)}"
