"""Hashing helpers for queue entries.

SQS reports an MD5 of every message body; the in-process queue store does
the same so consumers can verify what they received.
"""

from __future__ import annotations

import hashlib


def md5_hex(text: str) -> str:
    """Return the hex MD5 digest of *text* encoded as UTF-8."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()
