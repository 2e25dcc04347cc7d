"""
Key material parsing.

A secret key arrives in one of two textual forms:

- BYTE_LIST: comma-separated byte values, e.g. "12,250,7,...". The Solana CLI
  JSON form "[12,250,7,...]" is accepted too.
- BASE58: base58 encoding of the same 64 bytes (Phantom / solders export).

detect_key_format() picks the form up front and parse_key_material() runs the
matching decoder once, returning a KeyParseResult instead of raising.
load_keypair() is the raising wrapper used by the gateway.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

import base58
from solders.keypair import Keypair

from solana_connect.core.exceptions import InvalidKeyMaterial

SECRET_KEY_LENGTH = 64

_BYTE_LIST_RE = re.compile(r"^\[?[\d\s,]*\]?$")


class KeyFormat(str, Enum):
    BYTE_LIST = "byte_list"
    BASE58 = "base58"


@dataclass(frozen=True)
class KeyParseResult:
    """Outcome of parse_key_material: keypair on success, error message otherwise."""

    format: KeyFormat
    keypair: Keypair | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.keypair is not None


def detect_key_format(raw: str) -> KeyFormat:
    """BYTE_LIST when raw is digits/commas (optionally bracketed), else BASE58."""
    text = raw.strip()
    if _BYTE_LIST_RE.match(text) and ("," in text or text.startswith("[")):
        return KeyFormat.BYTE_LIST
    return KeyFormat.BASE58


def _decode_byte_list(text: str) -> bytes:
    body = text.strip()
    if body.startswith("["):
        if not body.endswith("]"):
            raise ValueError("unterminated '[' in byte list")
        body = body[1:-1]
    values: list[int] = []
    for i, part in enumerate(body.split(",")):
        part = part.strip()
        if not part:
            raise ValueError(f"empty entry at position {i}")
        value = int(part)
        if not 0 <= value <= 255:
            raise ValueError(f"entry {value} at position {i} is not a byte")
        values.append(value)
    return bytes(values)


def _decode_base58(text: str) -> bytes:
    return base58.b58decode(text.strip())


_DECODERS = {
    KeyFormat.BYTE_LIST: _decode_byte_list,
    KeyFormat.BASE58: _decode_base58,
}


def parse_key_material(raw: str) -> KeyParseResult:
    """
    Parse raw key material into a Keypair. Never raises.

    The decoded secret must be exactly 64 bytes (32-byte seed + 32-byte public key).
    """
    if not isinstance(raw, str) or not raw.strip():
        return KeyParseResult(format=KeyFormat.BASE58, error="key material is empty")
    fmt = detect_key_format(raw)
    try:
        secret = _DECODERS[fmt](raw)
    except ValueError as e:
        return KeyParseResult(format=fmt, error=f"cannot decode {fmt.value} key material: {e}")
    if len(secret) != SECRET_KEY_LENGTH:
        return KeyParseResult(
            format=fmt,
            error=f"secret key must be {SECRET_KEY_LENGTH} bytes, got {len(secret)}",
        )
    try:
        keypair = Keypair.from_bytes(secret)
    except ValueError as e:
        return KeyParseResult(format=fmt, error=f"invalid secret key: {e}")
    return KeyParseResult(format=fmt, keypair=keypair)


def load_keypair(raw: str) -> Keypair:
    """Parse raw key material or raise InvalidKeyMaterial."""
    result = parse_key_material(raw)
    if not result.ok:
        raise InvalidKeyMaterial(result.error or "invalid key material", key_format=result.format.value)
    return result.keypair


def export_secret(keypair: Keypair) -> str:
    """Comma-separated byte list of the 64-byte secret key."""
    return ",".join(str(b) for b in bytes(keypair))


def generate_keypair() -> Keypair:
    return Keypair()
