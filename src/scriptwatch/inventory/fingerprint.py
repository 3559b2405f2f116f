"""Content fingerprints for inline script bodies."""

from __future__ import annotations

import hashlib
import re

# Unpaired UTF-16 surrogates can arrive from DOM text and cannot be encoded
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def fingerprint(text: str) -> str:
    """Return the SHA-256 hex digest of an inline script body.

    The body is hashed exactly as given: whitespace and comment edits
    change the fingerprint. Lone surrogates are hashed as U+FFFD, the
    replacement character browsers and Node use when encoding to UTF-8.
    """
    data = _LONE_SURROGATE.sub("\ufffd", text).encode("utf-8")
    return hashlib.sha256(data).hexdigest()
