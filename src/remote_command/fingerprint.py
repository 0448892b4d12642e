from __future__ import annotations

import hashlib

from .canonical import canonical_bytes
from .command import Command

# 32 bits: a short identity hint, collisions are expected at scale.
FINGERPRINT_LENGTH = 8


def fingerprint(data: bytes) -> str:
    """Return the short SHA-256 hex prefix used as a command id.

    Example:
        ```python
        assert fingerprint(b"") == "e3b0c442"
        ```
    """
    return hashlib.sha256(data).hexdigest()[:FINGERPRINT_LENGTH]


def stable_id(command: Command) -> str:
    """Fingerprint the canonical form of a command.

    Example:
        ```python
        cid = stable_id(Command(args=["echo", "hi"], exec_root="/tmp/x"))
        ```
    """
    return fingerprint(canonical_bytes(command))
