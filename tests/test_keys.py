"""
Key material parsing: byte-list and base58 forms, and rejection of malformed input.
"""

from __future__ import annotations

import base58
import pytest
from solders.keypair import Keypair


def test_detect_key_format():
    from solana_connect.wallet.keys import KeyFormat, detect_key_format

    assert detect_key_format("1,2,3") == KeyFormat.BYTE_LIST
    assert detect_key_format("[1, 2, 3]") == KeyFormat.BYTE_LIST
    assert detect_key_format(" 4,5 ,6\n") == KeyFormat.BYTE_LIST
    assert detect_key_format("5MaiiCavjCmn9Hs1o3eznqDEhRwxo7pXiAYez7keQUviUkauRiTMD8DrESdrNjN8zd9mTmVhRvBJeg5vhyvgrAhG") == KeyFormat.BASE58
    # digits alone with no separator are a base58 candidate, not a list
    assert detect_key_format("123456") == KeyFormat.BASE58


@pytest.mark.parametrize("seed_byte", [0, 7, 200])
def test_byte_list_and_base58_give_same_address(seed_byte):
    """Both encodings of the same 64 bytes recover the same address."""
    from solana_connect.wallet.keys import KeyFormat, parse_key_material

    kp = Keypair.from_seed(bytes([seed_byte] * 32))
    secret = bytes(kp)
    as_list = parse_key_material(",".join(str(b) for b in secret))
    as_b58 = parse_key_material(base58.b58encode(secret).decode())

    assert as_list.ok and as_list.format == KeyFormat.BYTE_LIST
    assert as_b58.ok and as_b58.format == KeyFormat.BASE58
    assert as_list.keypair.pubkey() == as_b58.keypair.pubkey() == kp.pubkey()


def test_bracketed_json_array_accepted(sender_keypair):
    """Solana CLI id.json form [1,2,...] parses like the bare list."""
    from solana_connect.wallet.keys import parse_key_material

    raw = "[" + ", ".join(str(b) for b in bytes(sender_keypair)) + "]"
    result = parse_key_material(raw)
    assert result.ok
    assert result.keypair.pubkey() == sender_keypair.pubkey()


def test_byte_list_wrong_length_rejected(sender_keypair):
    from solana_connect.wallet.keys import parse_key_material

    short = ",".join(str(b) for b in bytes(sender_keypair)[:32])
    result = parse_key_material(short)
    assert not result.ok
    assert result.keypair is None
    assert "64 bytes" in result.error


def test_byte_list_out_of_range_rejected(sender_byte_list):
    from solana_connect.wallet.keys import parse_key_material

    bad = "256," + sender_byte_list.split(",", 1)[1]
    result = parse_key_material(bad)
    assert not result.ok
    assert "not a byte" in result.error


def test_byte_list_empty_entry_rejected(sender_byte_list):
    from solana_connect.wallet.keys import parse_key_material

    result = parse_key_material(sender_byte_list + ",")
    assert not result.ok
    assert "empty entry" in result.error


def test_base58_wrong_length_rejected():
    from solana_connect.wallet.keys import parse_key_material

    result = parse_key_material(base58.b58encode(bytes(32)).decode())
    assert not result.ok
    assert "64 bytes" in result.error


@pytest.mark.parametrize("raw", ["not-a-key!!", "0OIl", "   ", ""])
def test_malformed_material_raises_invalid_key(raw):
    """Neither list nor base58: load_keypair raises InvalidKeyMaterial, never a wrong key."""
    from solana_connect.core.exceptions import InvalidKeyMaterial
    from solana_connect.wallet.keys import load_keypair, parse_key_material

    assert not parse_key_material(raw).ok
    with pytest.raises(InvalidKeyMaterial):
        load_keypair(raw)


def test_invalid_key_material_is_value_error():
    from solana_connect.core.exceptions import InvalidKeyMaterial
    from solana_connect.wallet.keys import load_keypair

    with pytest.raises(ValueError) as excinfo:
        load_keypair("1,2,3")
    assert isinstance(excinfo.value, InvalidKeyMaterial)
    assert excinfo.value.key_format == "byte_list"


def test_export_secret_is_importable(sender_keypair):
    from solana_connect.wallet.keys import export_secret, load_keypair

    exported = export_secret(sender_keypair)
    assert len(exported.split(",")) == 64
    assert load_keypair(exported).pubkey() == sender_keypair.pubkey()
