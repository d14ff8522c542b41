"""Short identifiers derived from numeric file ids.

A short id is the base-62 spelling of the record id, so uniqueness comes
from the database's primary key and no allocator state is needed.
"""

import secrets

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)

STORAGE_NAMESPACE = "files"

# "_" is outside ALPHABET: a placeholder never equals an encoded id and
# never passes is_short_id().
PLACEHOLDER_PREFIX = "_"


def encode(number: int) -> str:
    if number < 0:
        raise ValueError(f"Cannot encode negative id {number}")
    if number == 0:
        return ALPHABET[0]
    digits = []
    while number:
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])
    return "".join(reversed(digits))


def is_short_id(value: str) -> bool:
    return bool(value) and all(c in ALPHABET for c in value)


def placeholder() -> str:
    return PLACEHOLDER_PREFIX + secrets.token_urlsafe(12)


def derive_storage_key(file_id: int) -> str:
    return f"{STORAGE_NAMESPACE}/{file_id}"
