"""
Main Chert API client
"""

import logging
from typing import Optional

from .config import ClientConfig
from .errors import ChertError, ValidationError
from .managers import Dispatcher, GovernanceManager, PrivacyManager, StakingManager
from .models import Block, NetworkStatus, Transaction
from .transport import RpcTransport
from .wallet import WalletManager

logger = logging.getLogger(__name__)


class ChertClient:
    """
    Main client for interacting with the Chert network.

    Example:
        >>> async with ChertClient(ClientConfig(endpoint="http://localhost:8545")) as client:
        ...     status = await client.get_network_status()
        ...     print(f"Block height: {status.block_height}")
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[RpcTransport] = None,
    ):
        """
        Initialize Chert client.

        Args:
            config: Client configuration (default: ClientConfig())
            transport: Pre-built transport; when given, its configuration is used
        """
        self.transport = transport or RpcTransport(config)
        self.config = self.transport.config

        dispatcher = Dispatcher(self.transport)
        self.wallet = WalletManager(self.transport, self.get_transaction)
        self.staking = StakingManager(dispatcher)
        self.governance = GovernanceManager(dispatcher)
        self.privacy = PrivacyManager(dispatcher)

    def get_config(self) -> ClientConfig:
        return self.config

    # Network Information

    async def get_network_status(self) -> NetworkStatus:
        """
        Get current network status.

        Returns:
            NetworkStatus object
        """
        data = await self.transport.call("getNetworkStatus")
        return NetworkStatus.from_dict(data)

    async def get_latest_block(self) -> Block:
        """
        Get the latest block.

        Returns:
            Block object
        """
        data = await self.transport.call("getLatestBlock")
        return Block.from_dict(data)

    async def get_block(self, height: int) -> Block:
        """
        Get a block by height.

        Args:
            height: Block height

        Returns:
            Block object
        """
        if height < 0:
            raise ValidationError("height", "Block height cannot be negative")
        data = await self.transport.call("getBlock", [height])
        return Block.from_dict(data)

    async def get_transaction(self, tx_hash: str) -> Transaction:
        """
        Get a transaction by hash.

        Args:
            tx_hash: Transaction hash

        Returns:
            Transaction object
        """
        if not tx_hash:
            raise ValidationError("tx_hash", "Transaction hash cannot be empty")
        data = await self.transport.call("getTransaction", [tx_hash])
        return Transaction.from_dict(data)

    async def is_connected(self) -> bool:
        """
        Check whether the node answers.

        Returns:
            True if getNetworkStatus succeeds, False otherwise
        """
        try:
            await self.get_network_status()
        except ChertError as e:
            logger.debug("node at %s not reachable: %s", self.config.endpoint, e)
            return False
        return True

    def close(self):
        """Close the transport"""
        self.transport.close()

    async def aclose(self):
        await self.transport.aclose()

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, *args):
        """Context manager exit"""
        self.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()
