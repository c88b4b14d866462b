"""
Data models for Chert SDK
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import ProtocolError


def _require(data: Dict[str, Any], key: str, model: str) -> Any:
    if not isinstance(data, dict):
        raise ProtocolError(f"Expected an object for {model}, got {type(data).__name__}")
    if key not in data or data[key] is None:
        raise ProtocolError(f"{model} is missing '{key}'")
    return data[key]


_MISSING = object()


def _int(data: Dict[str, Any], key: str, model: str, default: Any = _MISSING) -> Any:
    if default is _MISSING:
        value = _require(data, key, model)
    else:
        value = data.get(key) if isinstance(data, dict) else None
        if value is None:
            return default
    if isinstance(value, bool):
        raise ProtocolError(f"{model} field '{key}' is not an integer: {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ProtocolError(f"{model} field '{key}' is not an integer: {value!r}") from None


def _enum(enum_cls, value: Any, model: str):
    # numeric values follow declaration order
    if isinstance(value, int) and not isinstance(value, bool):
        members = list(enum_cls)
        if 0 <= value < len(members):
            return members[value]
        raise ProtocolError(f"Unknown {model} value: {value!r}")
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        raise ProtocolError(f"Unknown {model} value: {value!r}") from None


# Accounts and transfers

@dataclass
class Account:
    """Account keys and address; watch-only when private_key is None"""
    address: str
    public_key: str
    private_key: Optional[str] = None

    @property
    def can_sign(self) -> bool:
        return bool(self.private_key)

    def __repr__(self) -> str:
        # keep private keys out of logs and tracebacks
        return (
            f"Account(address={self.address!r}, public_key={self.public_key!r}, "
            f"watch_only={not self.can_sign})"
        )


@dataclass
class Balance:
    """Account balance information"""
    available: str
    pending: str
    total: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Balance":
        return cls(
            available=str(_require(data, "available", "Balance")),
            pending=str(data.get("pending") or "0"),
            total=str(data.get("total") or data["available"]),
        )


@dataclass
class TransactionRequest:
    """Transfer request; amount and fee are decimal strings"""
    to: str
    amount: str
    fee: str
    memo: Optional[str] = None
    nonce: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "to": self.to,
            "amount": self.amount,
            "fee": self.fee,
            "memo": self.memo,
            "nonce": self.nonce,
        }


@dataclass(frozen=True)
class SignedTransaction:
    """Signed envelope submitted with sendTransaction"""
    sender: str
    recipient: str
    amount: str
    fee: str
    nonce: int
    signature: str
    memo: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sender": self.sender,
            "recipient": self.recipient,
            "amount": self.amount,
            "fee": self.fee,
            "nonce": self.nonce,
            "signature": self.signature,
            "memo": self.memo,
        }


class TransactionStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    REJECTED = "rejected"

    @property
    def is_terminal_failure(self) -> bool:
        return self in (TransactionStatus.FAILED, TransactionStatus.REJECTED)


@dataclass
class Transaction:
    """Transaction as reported by the node"""
    hash: str
    from_address: str
    to_address: str
    amount: str
    fee: str
    status: TransactionStatus
    nonce: int = 0
    memo: Optional[str] = None
    block_height: Optional[int] = None
    timestamp: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        return cls(
            hash=_require(data, "hash", "Transaction"),
            from_address=data.get("from", ""),
            to_address=data.get("to", ""),
            amount=str(data.get("amount", "")),
            fee=str(data.get("fee", "")),
            status=_enum(TransactionStatus, _require(data, "status", "Transaction"), "status"),
            nonce=_int(data, "nonce", "Transaction", 0),
            memo=data.get("memo"),
            block_height=_int(data, "block_height", "Transaction", None),
            timestamp=data.get("timestamp"),
        )


@dataclass
class Fee:
    """Fee estimation"""
    amount: str
    gas_limit: Optional[int] = None
    gas_price: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Fee":
        return cls(
            amount=str(_require(data, "amount", "Fee")),
            gas_limit=_int(data, "gas_limit", "Fee", None),
            gas_price=data.get("gas_price"),
        )


# Network

@dataclass
class NetworkStatus:
    """Network status"""
    block_height: int
    network_id: str
    consensus_version: str = ""
    peer_count: int = 0
    syncing: bool = False
    latest_block_time: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NetworkStatus":
        return cls(
            block_height=_int(data, "block_height", "NetworkStatus"),
            network_id=data.get("network_id", ""),
            consensus_version=data.get("consensus_version", ""),
            peer_count=_int(data, "peer_count", "NetworkStatus", 0),
            syncing=bool(data.get("syncing", False)),
            latest_block_time=data.get("latest_block_time"),
        )


@dataclass
class Block:
    """Block header plus optional transactions"""
    height: int
    hash: str
    previous_hash: str = ""
    timestamp: Any = None
    transaction_count: int = 0
    proposer: str = ""
    transactions: Optional[List[Transaction]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Block":
        txs = data.get("transactions") if isinstance(data, dict) else None
        return cls(
            height=_int(data, "height", "Block"),
            hash=_require(data, "hash", "Block"),
            previous_hash=data.get("previous_hash", ""),
            timestamp=data.get("timestamp"),
            transaction_count=_int(data, "transaction_count", "Block", 0),
            proposer=data.get("proposer", ""),
            transactions=[Transaction.from_dict(tx) for tx in txs] if txs is not None else None,
        )


# Staking

class ValidatorStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    JAILED = "jailed"


@dataclass
class Validator:
    address: str
    name: str
    voting_power: str
    commission: str
    status: ValidatorStatus
    total_delegated: str = "0"
    delegator_count: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Validator":
        return cls(
            address=_require(data, "address", "Validator"),
            name=data.get("name", ""),
            voting_power=str(data.get("voting_power", "0")),
            commission=str(data.get("commission", "0")),
            status=_enum(ValidatorStatus, data.get("status", "inactive"), "validator status"),
            total_delegated=str(data.get("total_delegated", "0")),
            delegator_count=_int(data, "delegator_count", "Validator", 0),
        )


@dataclass
class Delegation:
    validator_address: str
    amount: str
    rewards: str = "0"
    timestamp: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Delegation":
        return cls(
            validator_address=_require(data, "validator_address", "Delegation"),
            amount=str(_require(data, "amount", "Delegation")),
            rewards=str(data.get("rewards", "0")),
            timestamp=data.get("timestamp"),
        )


@dataclass
class StakingRewards:
    total: str
    available: str
    pending: str
    last_claim: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StakingRewards":
        return cls(
            total=str(_require(data, "total", "StakingRewards")),
            available=str(data.get("available", "0")),
            pending=str(data.get("pending", "0")),
            last_claim=data.get("last_claim"),
        )


# Governance

class ProposalStatus(str, Enum):
    VOTING = "voting"
    PASSED = "passed"
    REJECTED = "rejected"
    EXECUTED = "executed"
    FAILED = "failed"


class VoteOption(str, Enum):
    YES = "yes"
    NO = "no"
    ABSTAIN = "abstain"
    NO_WITH_VETO = "no_with_veto"


@dataclass
class VoteTally:
    yes: str = "0"
    no: str = "0"
    abstain: str = "0"
    no_with_veto: str = "0"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VoteTally":
        data = data or {}
        return cls(
            yes=str(data.get("yes", "0")),
            no=str(data.get("no", "0")),
            abstain=str(data.get("abstain", "0")),
            no_with_veto=str(data.get("no_with_veto", "0")),
        )


@dataclass
class Proposal:
    id: str
    title: str
    description: str
    proposer: str
    status: ProposalStatus
    voting_start_time: Any = None
    voting_end_time: Any = None
    tally: VoteTally = field(default_factory=VoteTally)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Proposal":
        return cls(
            id=str(_require(data, "id", "Proposal")),
            title=data.get("title", ""),
            description=data.get("description", ""),
            proposer=data.get("proposer", ""),
            status=_enum(ProposalStatus, _require(data, "status", "Proposal"), "proposal status"),
            voting_start_time=data.get("voting_start_time"),
            voting_end_time=data.get("voting_end_time"),
            tally=VoteTally.from_dict(data.get("tally")),
        )


# Privacy

class PrivacyLevel(str, Enum):
    STEALTH = "stealth"
    ENCRYPTED = "encrypted"


@dataclass
class KeyPair:
    public: str
    secret: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyPair":
        return cls(
            public=_require(data, "public", "KeyPair"),
            secret=_require(data, "secret", "KeyPair"),
        )

    def to_dict(self) -> Dict[str, str]:
        return {"public": self.public, "secret": self.secret}


@dataclass
class StealthKeys:
    view_keypair: KeyPair
    spend_keypair: KeyPair

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StealthKeys":
        return cls(
            view_keypair=KeyPair.from_dict(_require(data, "view_keypair", "StealthKeys")),
            spend_keypair=KeyPair.from_dict(_require(data, "spend_keypair", "StealthKeys")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "view_keypair": self.view_keypair.to_dict(),
            "spend_keypair": self.spend_keypair.to_dict(),
        }


@dataclass
class StealthAccount:
    address: str
    view_key: str
    spend_public_key: str
    keys: Optional[StealthKeys] = None


@dataclass
class PrivateTransactionRequest:
    sender_keys: StealthKeys
    recipient_view_key: str
    amount: str
    fee: str
    privacy_level: PrivacyLevel = PrivacyLevel.STEALTH
    nonce: int = 0
    memo: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sender_keys": self.sender_keys.to_dict(),
            "recipient_view_key": self.recipient_view_key,
            "amount": self.amount,
            "fee": self.fee,
            "privacy_level": self.privacy_level.value,
            "nonce": self.nonce,
            "memo": self.memo,
        }
