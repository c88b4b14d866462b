"""
Chert Python SDK

Python SDK for the Chert network.

Features:
- Async JSON-RPC client with a stable error taxonomy
- Ed25519 account keys and transaction signing
- Transaction confirmation polling
- Staking, governance and privacy operations
"""

__version__ = "1.0.0"
__author__ = "Chert Team"

from .client import ChertClient
from .config import ClientConfig, Network
from .crypto import ChertCrypto
from .errors import (
    ApiError,
    ChertError,
    ConfigurationError,
    ConfirmationTimeout,
    CryptoError,
    GovernanceError,
    NetworkError,
    PrivacyError,
    ProtocolError,
    StakingError,
    TransactionError,
    ValidationError,
    WalletError,
)
from .models import (
    Account,
    Balance,
    Block,
    Fee,
    NetworkStatus,
    SignedTransaction,
    Transaction,
    TransactionRequest,
    TransactionStatus,
    VoteOption,
)
from .transport import RpcTransport
from .utils import Utils
from .watcher import ConfirmationWatcher

__all__ = [
    "ChertClient",
    "ClientConfig",
    "Network",
    "ChertCrypto",
    "RpcTransport",
    "ConfirmationWatcher",
    "Utils",
    "Account",
    "Balance",
    "Block",
    "Fee",
    "NetworkStatus",
    "SignedTransaction",
    "Transaction",
    "TransactionRequest",
    "TransactionStatus",
    "VoteOption",
    "ChertError",
    "ValidationError",
    "NetworkError",
    "ApiError",
    "ProtocolError",
    "CryptoError",
    "TransactionError",
    "ConfirmationTimeout",
    "WalletError",
    "StakingError",
    "GovernanceError",
    "PrivacyError",
    "ConfigurationError",
]
