"""
Staking, governance and privacy operations

These are pass-through calls: each operation is one entry in RPC_METHODS
naming the node method and how to decode its result. The managers only
shape parameters and dispatch through the shared transport.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from .errors import ChertError, GovernanceError, PrivacyError, ProtocolError, StakingError
from .models import (
    Delegation,
    PrivateTransactionRequest,
    Proposal,
    StakingRewards,
    StealthAccount,
    StealthKeys,
    Validator,
    VoteOption,
    VoteTally,
)
from .transport import RpcTransport


def _list_of(decode: Callable[[Any], Any]) -> Callable[[Any], List[Any]]:
    def decode_list(result: Any) -> List[Any]:
        if not isinstance(result, list):
            raise ProtocolError(f"Expected a list, got {type(result).__name__}")
        return [decode(item) for item in result]
    return decode_list


def _identifier(error_cls: Type[ChertError], what: str) -> Callable[[Any], str]:
    def decode_identifier(result: Any) -> str:
        if result is None:
            raise error_cls(f"Invalid {what} response")
        if isinstance(result, dict) and "hash" in result:
            return str(result["hash"])
        return str(result)
    return decode_identifier


@dataclass(frozen=True)
class RpcMethod:
    """A node method and the decoder for its result"""
    name: str
    decode: Callable[[Any], Any]


RPC_METHODS: Dict[str, RpcMethod] = {
    # staking
    "get_validators": RpcMethod("getValidators", _list_of(Validator.from_dict)),
    "get_validator": RpcMethod("getValidator", Validator.from_dict),
    "delegate": RpcMethod("staking_delegate", _identifier(StakingError, "delegation")),
    "get_delegations": RpcMethod("getDelegations", _list_of(Delegation.from_dict)),
    "get_staking_rewards": RpcMethod("getStakingRewards", StakingRewards.from_dict),
    # governance
    "get_proposals": RpcMethod("governance_getProposals", _list_of(Proposal.from_dict)),
    "get_proposal": RpcMethod("governance_getProposal", Proposal.from_dict),
    "create_proposal": RpcMethod(
        "governance_createProposal", _identifier(GovernanceError, "proposal creation")
    ),
    "vote": RpcMethod("governance_vote", _identifier(GovernanceError, "vote")),
    "get_proposal_votes": RpcMethod("governance_getProposalVotes", VoteTally.from_dict),
    # privacy
    "generate_stealth_keys": RpcMethod("privacy_generateStealthKeys", StealthKeys.from_dict),
    "send_private_transaction": RpcMethod(
        "sendPrivateTransaction", _identifier(PrivacyError, "private transaction")
    ),
}


class Dispatcher:
    """Looks up an operation in RPC_METHODS, calls it and decodes the result"""

    def __init__(self, transport: RpcTransport, methods: Optional[Dict[str, RpcMethod]] = None):
        self._transport = transport
        self._methods = RPC_METHODS if methods is None else methods

    async def invoke(self, operation: str, *params: Any) -> Any:
        method = self._methods[operation]
        result = await self._transport.call(method.name, list(params))
        return method.decode(result)


class StakingManager:
    """Staking and delegation operations"""

    def __init__(self, dispatcher: Dispatcher):
        self._dispatch = dispatcher.invoke

    async def get_validators(self) -> List[Validator]:
        return await self._dispatch("get_validators")

    async def get_validator(self, address: str) -> Validator:
        return await self._dispatch("get_validator", address)

    async def delegate(
        self, delegator_address: str, validator_address: str, amount: str, fee: str
    ) -> str:
        """
        Delegate stake to a validator.

        Returns:
            Transaction hash of the delegation
        """
        return await self._dispatch("delegate", delegator_address, validator_address, amount, fee)

    async def get_delegations(self, delegator_address: str) -> List[Delegation]:
        return await self._dispatch("get_delegations", delegator_address)

    async def get_staking_rewards(self, delegator_address: str) -> StakingRewards:
        return await self._dispatch("get_staking_rewards", delegator_address)


class GovernanceManager:
    """Governance proposals and voting"""

    def __init__(self, dispatcher: Dispatcher):
        self._dispatch = dispatcher.invoke

    async def get_proposals(self, limit: int = 10) -> List[Proposal]:
        return await self._dispatch("get_proposals", {"limit": limit})

    async def get_proposal(self, proposal_id: str) -> Proposal:
        return await self._dispatch("get_proposal", proposal_id)

    async def create_proposal(
        self, title: str, description: str, proposer_address: str, fee: str
    ) -> str:
        """
        Submit a new proposal.

        Returns:
            Identifier of the created proposal
        """
        return await self._dispatch("create_proposal", title, description, proposer_address, fee)

    async def vote(self, proposal_id: str, voter_address: str, option: VoteOption, fee: str) -> str:
        return await self._dispatch(
            "vote", proposal_id, voter_address, VoteOption(option).value, fee
        )

    async def get_proposal_votes(self, proposal_id: str) -> VoteTally:
        return await self._dispatch("get_proposal_votes", proposal_id)


class PrivacyManager:
    """Stealth addresses and private transfers"""

    def __init__(self, dispatcher: Dispatcher):
        self._dispatch = dispatcher.invoke

    async def generate_stealth_keys(self) -> StealthKeys:
        return await self._dispatch("generate_stealth_keys")

    def create_stealth_account(
        self, view_key: str, spend_public_key: str, keys: Optional[StealthKeys] = None
    ) -> StealthAccount:
        """
        Build a stealth account locally from a view key and spend public key.

        Both keys must be at least 20 characters; the address is built from
        their first 20 characters.
        """
        if len(view_key) < 20 or len(spend_public_key) < 20:
            raise PrivacyError("View key and spend public key must be at least 20 characters")
        address = f"stealth_{view_key[:20]}{spend_public_key[:20]}".replace(" ", "").lower()
        return StealthAccount(
            address=address,
            view_key=view_key,
            spend_public_key=spend_public_key,
            keys=keys,
        )

    async def send_private_transaction(
        self,
        request: PrivateTransactionRequest,
        recipient_view_key: str,
        recipient_spend_key: str,
    ) -> str:
        return await self._dispatch(
            "send_private_transaction", request, recipient_view_key, recipient_spend_key
        )
