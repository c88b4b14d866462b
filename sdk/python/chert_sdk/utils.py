"""
Utility functions for Chert
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional

from .errors import ValidationError
from .models import TransactionRequest

ADDRESS_PREFIX = "chert_"
ADDRESS_HEX_LENGTH = 40

_HEX_RE = re.compile(r'^[0-9a-fA-F]*$')
_ADDRESS_RE = re.compile(rf'^{ADDRESS_PREFIX}[0-9a-f]{{{ADDRESS_HEX_LENGTH}}}$')


class Utils:
    """Helper utilities for Chert operations"""

    @staticmethod
    def is_hex(value: str, length: Optional[int] = None) -> bool:
        """
        Check that a string is even-length hex.

        Args:
            value: String to check
            length: Exact number of hex characters required, if any

        Returns:
            True if valid, False otherwise
        """
        if not isinstance(value, str) or not value or len(value) % 2:
            return False
        if length is not None and len(value) != length:
            return False
        return bool(_HEX_RE.match(value))

    @staticmethod
    def is_valid_address(address: str) -> bool:
        """
        Validate address format ("chert_" followed by 40 lowercase hex characters).

        Args:
            address: Address string

        Returns:
            True if valid, False otherwise
        """
        return isinstance(address, str) and bool(_ADDRESS_RE.match(address))

    @staticmethod
    def parse_amount(value: str, field: str = "amount") -> Decimal:
        """
        Parse a decimal-string amount.

        Args:
            value: Amount as a decimal string (e.g. "50.0")
            field: Field name reported in the ValidationError

        Returns:
            Parsed Decimal

        Raises:
            ValidationError: if empty, non-numeric, non-finite or negative
        """
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(field, f"{field.capitalize()} cannot be empty")
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValidationError(field, f"Invalid {field} format") from None
        if not amount.is_finite():
            raise ValidationError(field, f"Invalid {field} format")
        if amount < 0:
            raise ValidationError(field, f"{field.capitalize()} cannot be negative")
        return amount

    @staticmethod
    def validate_transaction_request(request: TransactionRequest) -> None:
        """
        Validate a transfer request before it is signed.

        Args:
            request: Request to validate

        Raises:
            ValidationError: on an empty recipient, or an empty/invalid amount or fee
        """
        if not request.to:
            raise ValidationError("to", "Recipient address cannot be empty")
        Utils.parse_amount(request.amount, "amount")
        Utils.parse_amount(request.fee, "fee")
        if request.nonce is not None and (not isinstance(request.nonce, int) or request.nonce < 0):
            raise ValidationError("nonce", "Nonce must be a non-negative integer")

    @staticmethod
    def format_amount(amount: str, decimals: int = 8) -> str:
        """
        Format an amount for display.

        Args:
            amount: Decimal-string amount
            decimals: Number of decimal places (default: 8)

        Returns:
            Formatted string
        """
        return f"{Decimal(amount):.{decimals}f}"

    @staticmethod
    def format_address(address: str, length: int = 16) -> str:
        """
        Format address for display (shortened).

        Args:
            address: Full address
            length: Number of characters to show from start

        Returns:
            Shortened address with ellipsis
        """
        if len(address) <= length:
            return address
        return f"{address[:length]}..."
