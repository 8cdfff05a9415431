"""
Content-address identifiers for messages and blobs.

Identifiers use the legacy textual form ``<sigil><base64>.sha256``::

    %rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha256   (message)
    &rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha256   (blob)

The digest is exactly 32 bytes, written in standard base64 with padding.
Only canonical encodings are accepted: re-encoding the decoded bytes must
reproduce the original text, so two identifiers compare equal iff their
digests do.

Usage::

    from causalsort.identifiers import Multihash

    mh = Multihash.from_legacy("%rootBOK7pZikWM6aupei3PuE5ghRtFM44nrsX0FuBWY=.sha256")
    mh.to_legacy()
    Multihash.try_parse("not a hash")  # None
    Multihash.parse_prefix(mh.to_legacy() + "?thread")  # (mh, "?thread")
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from causalsort.errors import IdentifierError

__all__ = ["HashTarget", "Multihash", "DIGEST_SIZE", "HASH_SUFFIX"]

DIGEST_SIZE = 32
HASH_SUFFIX = ".sha256"

# 32 bytes -> 44 base64 chars (one '=' of padding)
_ENCODED_SIZE = 44


class HashTarget(Enum):
    """What kind of content a hash points at, keyed by its sigil."""

    MESSAGE = "%"
    BLOB = "&"


@dataclass(frozen=True)
class Multihash:
    """A sha256 content address.

    Attributes:
        target: Whether the hash names a message or a blob
        digest: The 32 raw digest bytes
    """

    target: HashTarget
    digest: bytes

    def __post_init__(self) -> None:
        if len(self.digest) != DIGEST_SIZE:
            raise IdentifierError(
                f"sha256 digest must be {DIGEST_SIZE} bytes, got {len(self.digest)}"
            )

    @classmethod
    def parse_prefix(cls, text: str | bytes) -> Tuple["Multihash", str]:
        """Parse an identifier from the start of ``text``.

        Whatever follows the ``.sha256`` suffix is returned untouched, so
        ``"%<base64>.sha256?thread"`` yields the identifier and ``"?thread"``.

        Args:
            text: Text starting with an identifier (``str`` or UTF-8 ``bytes``)

        Returns:
            The parsed identifier and the remaining text

        Raises:
            IdentifierError: If the text does not start with a canonical identifier
        """
        if isinstance(text, bytes):
            try:
                text = text.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise IdentifierError("identifier is not valid UTF-8") from exc

        if not text:
            raise IdentifierError("empty identifier")

        sigil = text[0]
        try:
            target = HashTarget(sigil)
        except ValueError:
            raise IdentifierError(f"unknown sigil {sigil!r}") from None

        encoded = text[1 : 1 + _ENCODED_SIZE]
        if len(encoded) != _ENCODED_SIZE:
            raise IdentifierError(
                f"base64 digest must be {_ENCODED_SIZE} characters, got {len(encoded)}"
            )

        try:
            digest = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise IdentifierError(f"invalid base64 digest: {exc}") from exc

        if base64.b64encode(digest).decode("ascii") != encoded:
            raise IdentifierError("non-canonical base64 digest")

        rest = text[1 + _ENCODED_SIZE :]
        if not rest.startswith(HASH_SUFFIX):
            raise IdentifierError(f"digest must be followed by {HASH_SUFFIX!r}")

        return cls(target=target, digest=digest), rest[len(HASH_SUFFIX) :]

    @classmethod
    def from_legacy(cls, text: str | bytes) -> "Multihash":
        """Parse the legacy ``<sigil><base64>.sha256`` form.

        Unlike ``parse_prefix`` the whole text must be the identifier.

        Args:
            text: Identifier text (``str`` or UTF-8 ``bytes``)

        Returns:
            The parsed identifier

        Raises:
            IdentifierError: If the text is not a canonical identifier
        """
        mh, rest = cls.parse_prefix(text)
        if rest:
            raise IdentifierError(f"unexpected text after identifier: {rest[:20]!r}")
        return mh

    @classmethod
    def try_parse(
        cls, text: str | bytes, allow_trailing: bool = False
    ) -> Optional["Multihash"]:
        """Parse an identifier, returning None instead of raising.

        With ``allow_trailing`` any text after the identifier is ignored.
        """
        try:
            if allow_trailing:
                return cls.parse_prefix(text)[0]
            return cls.from_legacy(text)
        except IdentifierError:
            return None

    def to_legacy(self) -> str:
        """Render the identifier in its legacy textual form."""
        encoded = base64.b64encode(self.digest).decode("ascii")
        return f"{self.target.value}{encoded}{HASH_SUFFIX}"

    @property
    def is_message(self) -> bool:
        return self.target is HashTarget.MESSAGE

    def __str__(self) -> str:
        return self.to_legacy()
