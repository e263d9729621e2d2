"""Base-62 decoding of article identifiers."""

from __future__ import annotations

ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

_INDEX = {ch: i for i, ch in enumerate(ALPHABET)}


def encode(identifier: str) -> int:
    """Return the base-10 value of a base-62 identifier, most significant symbol first.

    Characters are assumed to come from ``ALPHABET``; the crawler's link
    pattern only ever yields such identifiers.
    """
    value = 0
    for ch in identifier:
        value = value * 62 + _INDEX[ch]
    return value
