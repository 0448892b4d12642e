from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass

_HASH_PATTERN = re.compile(r"^[0-9a-f]{64}$")


@dataclass(frozen=True, slots=True)
class Digest:
    """Content address of a blob: its SHA-256 hex hash and size in bytes.

    Example:
        ```python
        d = Digest(hash="e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855", size_bytes=0)
        ```
    """

    hash: str = hashlib.sha256(b"").hexdigest()
    size_bytes: int = 0

    def __str__(self) -> str:
        """Return the `<hash>/<size>` form of the digest.

        Example:
            ```python
            text = str(Digest())
            ```
        """
        return f"{self.hash}/{self.size_bytes}"

    def validate(self) -> None:
        """Raise ValueError unless the hash is SHA-256 hex and the size is non-negative.

        Example:
            ```python
            Digest().validate()
            ```
        """
        if not _HASH_PATTERN.match(self.hash):
            raise ValueError(f"Digest hash must be 64 lowercase hex characters, got {self.hash!r}")
        if self.size_bytes < 0:
            raise ValueError(f"Digest size must be non-negative, got {self.size_bytes}")

    @classmethod
    def from_string(cls, text: str) -> "Digest":
        """Parse and validate a digest in `<hash>/<size>` form.

        Example:
            ```python
            d = Digest.from_string(str(Digest()))
            ```
        """
        hash_part, sep, size_part = text.partition("/")
        if not sep:
            raise ValueError(f"Digest must look like '<hash>/<size>', got {text!r}")
        try:
            size = int(size_part)
        except ValueError:
            raise ValueError(f"Digest size must be an integer, got {size_part!r}") from None
        digest = cls(hash=hash_part, size_bytes=size)
        digest.validate()
        return digest


EMPTY_DIGEST = Digest()
