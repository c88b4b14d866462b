"""Tests for key material and transaction signing."""

import pytest

from chert_sdk import ChertCrypto, TransactionRequest, ValidationError
from chert_sdk.utils import Utils

PRIVATE_KEY = "4f" * 32


def make_request(**overrides):
    fields = dict(to="chert_" + "2" * 40, amount="50.0", fee="0.05", memo="rent", nonce=7)
    fields.update(overrides)
    return TransactionRequest(**fields)


class TestKeyMaterial:
    def test_generate_keypair_shapes(self):
        private_key, public_key = ChertCrypto.generate_keypair()
        assert Utils.is_hex(private_key, 64)
        assert Utils.is_hex(public_key, 64)
        assert private_key == private_key.lower()
        assert ChertCrypto.derive_public_key(private_key) == public_key

    def test_generate_keypair_unique(self):
        keys = {ChertCrypto.generate_keypair()[0] for _ in range(200)}
        assert len(keys) == 200

    def test_address_derivation_is_stable(self):
        public_key = ChertCrypto.derive_public_key(PRIVATE_KEY)
        address = ChertCrypto.derive_address(public_key)
        for _ in range(5):
            assert ChertCrypto.derive_address(ChertCrypto.derive_public_key(PRIVATE_KEY)) == address
        assert Utils.is_valid_address(address)

    def test_address_is_case_normalized(self):
        public_key = ChertCrypto.derive_public_key(PRIVATE_KEY)
        assert ChertCrypto.derive_address(public_key.upper()) == ChertCrypto.derive_address(public_key)

    def test_address_format(self):
        address = ChertCrypto.derive_address("00" * 32)
        assert address.startswith("chert_")
        assert len(address) == len("chert_") + 40

    @pytest.mark.parametrize("bad_key", ["", "xyz", "4f" * 31, "4f" * 33, "g" * 64])
    def test_derive_public_key_rejects_bad_keys(self, bad_key):
        with pytest.raises(ValidationError) as exc_info:
            ChertCrypto.derive_public_key(bad_key)
        assert exc_info.value.field == "private_key"

    def test_derive_address_rejects_non_hex(self):
        with pytest.raises(ValidationError):
            ChertCrypto.derive_address("not-hex")


class TestSigning:
    def test_canonical_payload_order(self):
        request = make_request()
        assert ChertCrypto.canonical_payload(request) == "chert_" + "2" * 40 + "50.00.057rent"

    def test_canonical_payload_defaults(self):
        request = make_request(memo=None, nonce=None)
        assert ChertCrypto.canonical_payload(request) == "chert_" + "2" * 40 + "50.00.050"

    def test_signature_is_deterministic(self):
        first = ChertCrypto.sign_transaction(make_request(), PRIVATE_KEY)
        for _ in range(3):
            assert ChertCrypto.sign_transaction(make_request(), PRIVATE_KEY) == first
        assert Utils.is_hex(first, 128)

    @pytest.mark.parametrize(
        "change",
        [
            {"to": "chert_" + "3" * 40},
            {"amount": "50.1"},
            {"fee": "0.06"},
            {"nonce": 8},
            {"memo": "food"},
            {"memo": None},
        ],
    )
    def test_any_field_change_changes_signature(self, change):
        base = ChertCrypto.sign_transaction(make_request(), PRIVATE_KEY)
        assert ChertCrypto.sign_transaction(make_request(**change), PRIVATE_KEY) != base

    def test_verify_signature(self):
        request = make_request()
        public_key = ChertCrypto.derive_public_key(PRIVATE_KEY)
        signature = ChertCrypto.sign_transaction(request, PRIVATE_KEY)

        assert ChertCrypto.verify_signature(request, signature, public_key)
        assert not ChertCrypto.verify_signature(make_request(amount="51"), signature, public_key)
        assert not ChertCrypto.verify_signature(request, "00" * 64, public_key)
        assert not ChertCrypto.verify_signature(request, "zz", public_key)

    def test_signature_from_other_key_does_not_verify(self):
        request = make_request()
        other_private, other_public = ChertCrypto.generate_keypair()
        signature = ChertCrypto.sign_transaction(request, PRIVATE_KEY)
        assert not ChertCrypto.verify_signature(request, signature, other_public)
