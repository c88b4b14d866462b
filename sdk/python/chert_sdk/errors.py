"""
Exception hierarchy for the Chert SDK
"""

from typing import Any, Optional


class ChertError(Exception):
    """
    Base class for all SDK errors.

    Attributes:
        code: Stable error kind (e.g. "NETWORK_ERROR")
        data: Additional error data, if any
    """

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", data: Any = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.data = data


class ValidationError(ChertError):
    """Caller input rejected before any network call"""

    def __init__(self, field: str, message: str):
        super().__init__(
            f"Validation error in {field}: {message}",
            "VALIDATION_ERROR",
            {"field": field},
        )
        self.field = field


class NetworkError(ChertError):
    """The HTTP round trip could not be completed"""

    def __init__(self, message: str):
        super().__init__(message, "NETWORK_ERROR")


class ApiError(ChertError):
    """
    HTTP or JSON-RPC level failure reported by the node.

    Attributes:
        status_code: HTTP status for non-2xx responses
        rpc_code: JSON-RPC error code for error envelopes
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        rpc_code: Optional[int] = None,
        data: Any = None,
    ):
        super().__init__(message, "API_ERROR", data)
        self.status_code = status_code
        self.rpc_code = rpc_code

    @property
    def is_http_error(self) -> bool:
        return self.status_code is not None


class ProtocolError(ChertError):
    """Response received but not decodable as a JSON-RPC envelope"""

    def __init__(self, message: str = "invalid response"):
        super().__init__(message, "PROTOCOL_ERROR")


class CryptoError(ChertError):
    def __init__(self, message: str):
        super().__init__(message, "CRYPTO_ERROR")


class TransactionError(ChertError):
    """A transaction failed, was rejected, or could not be submitted"""

    def __init__(self, message: str, tx_hash: Optional[str] = None, status: Optional[str] = None):
        data = {"transaction_hash": tx_hash} if tx_hash is not None else None
        super().__init__(message, "TRANSACTION_ERROR", data)
        self.tx_hash = tx_hash
        self.status = status


class ConfirmationTimeout(ChertError):
    """Confirmation polling ran past its deadline without a terminal outcome"""

    def __init__(self, tx_hash: str, timeout: float):
        super().__init__(
            f"Transaction {tx_hash} not confirmed within {timeout}s",
            "TIMEOUT_ERROR",
            {"transaction_hash": tx_hash, "timeout": timeout},
        )
        self.tx_hash = tx_hash
        self.timeout = timeout


class WalletError(ChertError):
    def __init__(self, message: str):
        super().__init__(message, "WALLET_ERROR")


class StakingError(ChertError):
    def __init__(self, message: str):
        super().__init__(message, "STAKING_ERROR")


class GovernanceError(ChertError):
    def __init__(self, message: str):
        super().__init__(message, "GOVERNANCE_ERROR")


class PrivacyError(ChertError):
    def __init__(self, message: str):
        super().__init__(message, "PRIVACY_ERROR")


class ConfigurationError(ChertError):
    def __init__(self, message: str):
        super().__init__(message, "CONFIG_ERROR")
