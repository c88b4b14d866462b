"""
Account management and transfers
"""

import logging
from typing import Optional

from .crypto import ChertCrypto
from .errors import ChertError, TransactionError, ValidationError, WalletError
from .models import Account, Balance, Fee, SignedTransaction, Transaction, TransactionRequest
from .transport import RpcTransport
from .utils import Utils
from .watcher import ConfirmationWatcher, TransactionFetcher

logger = logging.getLogger(__name__)


class WalletManager:
    """
    Account creation, balances, and signed transfers.

    Example:
        >>> account = client.wallet.create_account()
        >>> request = TransactionRequest(to=recipient, amount="50.0", fee="0.05")
        >>> tx_hash = await client.wallet.send_transaction(request, account)
        >>> tx = await client.wallet.wait_for_transaction(tx_hash)
    """

    def __init__(self, transport: RpcTransport, fetch_transaction: TransactionFetcher):
        self._transport = transport
        self.watcher = ConfirmationWatcher(fetch_transaction)

    # Accounts

    def create_account(self) -> Account:
        """
        Create a new account with a randomly generated keypair.

        Returns:
            Account holding the new private key

        Raises:
            CryptoError: if key generation fails
        """
        private_key, public_key = ChertCrypto.generate_keypair()
        return Account(
            address=ChertCrypto.derive_address(public_key),
            public_key=public_key,
            private_key=private_key,
        )

    def import_account(self, private_key: str) -> Account:
        """
        Import an account from a private key.

        Args:
            private_key: Hex-encoded private key

        Returns:
            Account derived from the private key

        Raises:
            ValidationError: if the key is empty or not valid hex
        """
        if not private_key:
            raise ValidationError("private_key", "Private key cannot be empty")
        private_key = private_key.lower()
        public_key = ChertCrypto.derive_public_key(private_key)
        return Account(
            address=ChertCrypto.derive_address(public_key),
            public_key=public_key,
            private_key=private_key,
        )

    def create_watch_only_account(self, public_key: str) -> Account:
        """
        Create a watch-only account from a public key.

        Args:
            public_key: Hex-encoded public key

        Returns:
            Account without a private key
        """
        if not public_key:
            raise ValidationError("public_key", "Public key cannot be empty")
        public_key = public_key.lower()
        return Account(address=ChertCrypto.derive_address(public_key), public_key=public_key)

    # Node queries

    async def get_balance(self, address: str) -> Balance:
        """
        Get the balance for an account.

        Args:
            address: Account address

        Returns:
            Balance object
        """
        if not address:
            raise ValidationError("address", "Address cannot be empty")
        data = await self._transport.call("getBalance", [address])
        return Balance.from_dict(data)

    async def estimate_fee(self, request: TransactionRequest) -> Fee:
        """
        Estimate the fee for a transaction.

        Args:
            request: Transaction request details

        Returns:
            Fee object
        """
        Utils.validate_transaction_request(request)
        data = await self._transport.call("estimateFee", [request])
        return Fee.from_dict(data)

    # Transfers

    def sign_transaction(self, request: TransactionRequest, account: Account) -> SignedTransaction:
        """
        Validate and sign a request without submitting it.

        Args:
            request: Transaction request details
            account: Account to send from (must hold a private key)

        Returns:
            SignedTransaction envelope

        Raises:
            WalletError: if the account is watch-only
            ValidationError: if the request is invalid
        """
        if not account.can_sign:
            raise WalletError("Account does not have a private key")

        Utils.validate_transaction_request(request)
        signature = ChertCrypto.sign_transaction(request, account.private_key)

        return SignedTransaction(
            sender=account.address,
            recipient=request.to,
            amount=request.amount,
            fee=request.fee,
            nonce=request.nonce or 0,
            signature=signature,
            memo=request.memo,
        )

    async def send_transaction(self, request: TransactionRequest, account: Account) -> str:
        """
        Sign a transaction and submit it to the network.

        Args:
            request: Transaction request details
            account: Account to send from

        Returns:
            Transaction hash

        Raises:
            WalletError: if the account is watch-only
            ValidationError: if the request is invalid
            TransactionError: if the node's response carries no hash
        """
        envelope = self.sign_transaction(request, account)
        result = await self._transport.call("sendTransaction", [envelope])

        if not isinstance(result, dict) or not result.get("hash"):
            raise TransactionError("Invalid transaction response")

        tx_hash = str(result["hash"])
        logger.debug("submitted transaction %s from %s", tx_hash, account.address)
        return tx_hash

    async def wait_for_transaction(
        self,
        tx_hash: str,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
        raise_on_timeout: bool = False,
    ) -> Optional[Transaction]:
        """
        Wait for a transaction to be confirmed.

        Args:
            tx_hash: Transaction hash to wait for
            timeout: Maximum time to wait in seconds (default: 60)
            interval: Polling interval in seconds (default: 2)
            raise_on_timeout: Raise ConfirmationTimeout instead of returning None

        Returns:
            Confirmed Transaction, or None on timeout
        """
        return await self.watcher.wait(
            tx_hash,
            timeout=timeout,
            poll_interval=interval,
            raise_on_timeout=raise_on_timeout,
        )

    async def send_and_wait(
        self,
        request: TransactionRequest,
        account: Account,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
    ) -> Optional[Transaction]:
        """Submit a transaction and wait for its confirmation"""
        tx_hash = await self.send_transaction(request, account)
        try:
            return await self.wait_for_transaction(tx_hash, timeout, interval)
        except ChertError:
            logger.warning("transaction %s submitted but confirmation failed", tx_hash)
            raise
