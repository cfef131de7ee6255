"""Tests for subkey parsing and document signing"""

import pytest
from coincurve import PrivateKey, PublicKey

from src.infrastructure.exceptions import InvalidSubkeyError
from src.infrastructure.external.concrnt.credentials import Subkey
from src.infrastructure.external.concrnt.signer import SubkeySigner
from tests.factories import TEST_PRIVATE_KEY, TEST_SUBKEY


class TestSubkey:
    def test_parse(self):
        subkey = Subkey.parse(TEST_SUBKEY)

        assert subkey.private_key == TEST_PRIVATE_KEY
        assert subkey.ccid == "con1alice"
        assert subkey.domain == "home.example"
        assert subkey.ckid == "cck1testkey"

    def test_hex_prefix_is_stripped(self):
        subkey = Subkey.parse(f"concrnt-subkey 0x{TEST_PRIVATE_KEY} con1alice@home.example cck1")

        assert subkey.private_key == TEST_PRIVATE_KEY

    @pytest.mark.parametrize(
        "secret",
        [
            "",
            f"concrnt-subkey {TEST_PRIVATE_KEY} con1alice@home.example",
            f"other-prefix {TEST_PRIVATE_KEY} con1alice@home.example cck1",
            f"concrnt-subkey {TEST_PRIVATE_KEY} con1alice cck1",
            f"concrnt-subkey {TEST_PRIVATE_KEY} @home.example cck1",
            "concrnt-subkey not-hex con1alice@home.example cck1",
        ],
    )
    def test_malformed(self, secret):
        with pytest.raises(InvalidSubkeyError):
            Subkey.parse(secret)

    def test_repr_hides_private_key(self):
        assert TEST_PRIVATE_KEY not in repr(Subkey.parse(TEST_SUBKEY))


class TestSubkeySigner:
    def test_signature_recovers_to_subkey_public_key(self):
        signer = SubkeySigner(Subkey.parse(TEST_SUBKEY))
        document = '{"signer":"con1alice","body":"こんにちは"}'

        signature = bytes.fromhex(signer.sign(document))

        assert len(signature) == 65
        recovered = PublicKey.from_signature_and_message(
            signature, SubkeySigner.digest(document), hasher=None
        )
        expected = PrivateKey(bytes.fromhex(TEST_PRIVATE_KEY)).public_key
        assert recovered.format() == expected.format()

    def test_digest_is_keccak256(self):
        # keccak-256 of the empty string (differs from SHA3-256)
        assert SubkeySigner.digest("").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_signing_is_deterministic(self):
        signer = SubkeySigner(Subkey.parse(TEST_SUBKEY))

        assert signer.sign("doc") == signer.sign("doc")

    def test_zero_key_is_rejected(self):
        subkey = Subkey.parse("concrnt-subkey " + "00" * 32 + " con1alice@home.example cck1")

        with pytest.raises(InvalidSubkeyError):
            SubkeySigner(subkey)
