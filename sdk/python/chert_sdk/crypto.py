"""
Cryptographic utilities for Chert
"""

import hashlib
from typing import Tuple

import nacl.utils
from nacl.exceptions import BadSignatureError
from nacl.exceptions import CryptoError as NaclCryptoError
from nacl.signing import SigningKey, VerifyKey

from .errors import CryptoError, ValidationError
from .models import TransactionRequest
from .utils import ADDRESS_HEX_LENGTH, ADDRESS_PREFIX, Utils

PRIVATE_KEY_BYTES = 32
PUBLIC_KEY_BYTES = 32


class ChertCrypto:
    """
    Key material and transaction signing.

    Uses Ed25519 signatures via PyNaCl. Private keys are the 32-byte Ed25519
    seed, hex encoded; public keys are the 32-byte verify key, hex encoded.
    Ed25519 signing is deterministic, so the same request and key always
    produce the same signature.
    """

    @staticmethod
    def generate_keypair() -> Tuple[str, str]:
        """
        Generate a new Ed25519 keypair.

        Returns:
            Tuple of (private_key_hex, public_key_hex)

        Raises:
            CryptoError: if the secure random source is unavailable

        Example:
            >>> private_key, public_key = ChertCrypto.generate_keypair()
            >>> print(f"Address: {ChertCrypto.derive_address(public_key)}")
        """
        try:
            seed = nacl.utils.random(PRIVATE_KEY_BYTES)
        except (OSError, NaclCryptoError) as e:
            raise CryptoError(f"Secure random source unavailable: {e}") from e

        private_key = seed.hex()
        return private_key, ChertCrypto.derive_public_key(private_key)

    @staticmethod
    def derive_public_key(private_key: str) -> str:
        """
        Derive the public key for a private key.

        Args:
            private_key: Private key (64 hex characters)

        Returns:
            Public key (64 lowercase hex characters)

        Raises:
            ValidationError: if private_key is not hex of the expected length
        """
        signing_key = ChertCrypto._signing_key(private_key)
        return signing_key.verify_key.encode().hex()

    @staticmethod
    def derive_address(public_key: str) -> str:
        """
        Derive the network address for a public key.

        The address is "chert_" followed by the first 40 hex characters of
        sha256(public key bytes), lowercase.

        Args:
            public_key: Public key (hex)

        Returns:
            Address string

        Raises:
            ValidationError: if public_key is not valid hex
        """
        if not Utils.is_hex(public_key):
            raise ValidationError("public_key", "Invalid hex format")
        digest = hashlib.sha256(bytes.fromhex(public_key)).hexdigest()
        return ADDRESS_PREFIX + digest[:ADDRESS_HEX_LENGTH]

    @staticmethod
    def canonical_payload(request: TransactionRequest) -> str:
        """
        Build the canonical signing payload for a request.

        Fields are concatenated in fixed order: recipient, amount, fee,
        nonce (0 when absent), then memo when present. Verifiers rebuild the
        same string, so the order must not change.
        """
        payload = f"{request.to}{request.amount}{request.fee}{request.nonce or 0}"
        if request.memo:
            payload += request.memo
        return payload

    @staticmethod
    def sign_transaction(request: TransactionRequest, private_key: str) -> str:
        """
        Sign a transaction request.

        Args:
            request: Validated transaction request
            private_key: Sender's private key (hex)

        Returns:
            Signature (128 lowercase hex characters)

        Example:
            >>> request = TransactionRequest(to=recipient, amount="50.0", fee="0.05")
            >>> signature = ChertCrypto.sign_transaction(request, private_key)
        """
        signing_key = ChertCrypto._signing_key(private_key)
        message = ChertCrypto.canonical_payload(request).encode('utf-8')
        return signing_key.sign(message).signature.hex()

    @staticmethod
    def verify_signature(request: TransactionRequest, signature: str, public_key: str) -> bool:
        """
        Verify a transaction signature.

        Args:
            request: The request that was signed
            signature: Signature (hex)
            public_key: Signer's public key (hex)

        Returns:
            True if signature is valid, False otherwise
        """
        if not Utils.is_hex(signature) or not Utils.is_hex(public_key, PUBLIC_KEY_BYTES * 2):
            return False
        message = ChertCrypto.canonical_payload(request).encode('utf-8')
        try:
            VerifyKey(bytes.fromhex(public_key)).verify(message, bytes.fromhex(signature))
        except (BadSignatureError, ValueError):
            return False
        return True

    @staticmethod
    def _signing_key(private_key: str) -> SigningKey:
        if not private_key:
            raise ValidationError("private_key", "Private key cannot be empty")
        if not Utils.is_hex(private_key, PRIVATE_KEY_BYTES * 2):
            raise ValidationError(
                "private_key",
                f"Expected {PRIVATE_KEY_BYTES * 2} hex characters",
            )
        return SigningKey(bytes.fromhex(private_key))
