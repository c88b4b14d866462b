"""
Transaction confirmation polling
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from .errors import (
    ApiError,
    ChertError,
    ConfirmationTimeout,
    NetworkError,
    ProtocolError,
    TransactionError,
    ValidationError,
)
from .models import Transaction, TransactionStatus

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0
DEFAULT_POLL_INTERVAL = 2.0

# HTTP statuses that can clear up on their own while a transaction propagates
RETRYABLE_HTTP_STATUSES = frozenset({404, 408, 425, 429})

TransactionFetcher = Callable[[str], Awaitable[Transaction]]


def is_retryable(error: ChertError) -> bool:
    """
    Decide whether a failed status query should be retried.

    Lookup misses and transient failures are retried: network errors,
    undecodable responses, RPC error envelopes, 5xx and a few
    propagation-related 4xx statuses. Authorization failures and other
    client errors are not.
    """
    if isinstance(error, (NetworkError, ProtocolError)):
        return True
    if isinstance(error, ApiError):
        if not error.is_http_error:
            return True
        return error.status_code >= 500 or error.status_code in RETRYABLE_HTTP_STATUSES
    return False


class ConfirmationWatcher:
    """
    Polls a transaction until it is confirmed, fails, or the deadline passes.

    Example:
        >>> watcher = ConfirmationWatcher(client.get_transaction, timeout=30)
        >>> tx = await watcher.wait(tx_hash)
        >>> if tx is None:
        ...     print("still pending")
    """

    def __init__(
        self,
        fetch: TransactionFetcher,
        timeout: float = DEFAULT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        """
        Initialize the watcher.

        Args:
            fetch: Coroutine function returning the Transaction for a hash
            timeout: Default deadline in seconds
            poll_interval: Default delay between polls in seconds
        """
        self._fetch = fetch
        self.timeout = timeout
        self.poll_interval = poll_interval

    async def wait(
        self,
        tx_hash: str,
        timeout: Optional[float] = None,
        poll_interval: Optional[float] = None,
        raise_on_timeout: bool = False,
    ) -> Optional[Transaction]:
        """
        Wait for a transaction to be confirmed.

        Args:
            tx_hash: Transaction hash to wait for
            timeout: Maximum time to wait in seconds (default: watcher timeout)
            poll_interval: Delay between polls in seconds (default: watcher interval)
            raise_on_timeout: Raise ConfirmationTimeout instead of returning None

        Returns:
            The confirmed Transaction, or None if the deadline passed

        Raises:
            ValidationError: if tx_hash is empty
            TransactionError: if the transaction failed or was rejected
            ConfirmationTimeout: on timeout when raise_on_timeout is set
            ChertError: if a status query fails in a non-retryable way
        """
        if not tx_hash:
            raise ValidationError("tx_hash", "Transaction hash cannot be empty")

        timeout = self.timeout if timeout is None else timeout
        poll_interval = self.poll_interval if poll_interval is None else poll_interval

        start = time.monotonic()
        polls = 0
        while time.monotonic() - start < timeout:
            polls += 1
            try:
                tx = await self._fetch(tx_hash)
            except ChertError as e:
                if not is_retryable(e):
                    raise
                logger.debug("poll %d for %s failed, retrying: %s", polls, tx_hash, e)
            else:
                if tx.status == TransactionStatus.CONFIRMED:
                    logger.debug("transaction %s confirmed after %d polls", tx_hash, polls)
                    return tx
                if tx.status.is_terminal_failure:
                    logger.warning("transaction %s %s", tx_hash, tx.status.value)
                    raise TransactionError(
                        f"Transaction {tx.status.value}", tx_hash=tx_hash, status=tx.status.value
                    )
                logger.debug("poll %d for %s: %s", polls, tx_hash, tx.status.value)

            await asyncio.sleep(poll_interval)

        logger.debug("transaction %s not confirmed within %ss", tx_hash, timeout)
        if raise_on_timeout:
            raise ConfirmationTimeout(tx_hash, timeout)
        return None
