"""
Client configuration
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from .errors import ConfigurationError

DEFAULT_ENDPOINT = "https://api.chert.com"


class Network(str, Enum):
    """Advisory network selector; does not change the wire format"""
    MAINNET = "mainnet"
    TESTNET = "testnet"
    DEVNET = "devnet"


@dataclass
class ClientConfig:
    """
    Configuration for ChertClient.

    Example:
        >>> config = ClientConfig(endpoint="http://localhost:8545", network=Network.DEVNET)
        >>> client = ChertClient(config)
    """
    endpoint: str = DEFAULT_ENDPOINT
    network: Network = Network.MAINNET
    timeout: float = 30.0
    api_key: Optional[str] = None
    headers: Dict[str, str] = field(default_factory=dict)
    pool_size: int = 10

    def validate(self) -> "ClientConfig":
        """
        Check the configuration for obviously unusable values.

        Returns:
            self, so calls can be chained

        Raises:
            ConfigurationError: on an empty endpoint or non-positive timeout/pool size
        """
        if not self.endpoint:
            raise ConfigurationError("Endpoint cannot be empty")
        if self.timeout <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout}")
        if self.pool_size <= 0:
            raise ConfigurationError(f"Pool size must be positive, got {self.pool_size}")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "ClientConfig":
        """
        Build a configuration from CHERT_* environment variables.

        Reads CHERT_ENDPOINT, CHERT_NETWORK, CHERT_TIMEOUT and CHERT_API_KEY.
        Unset variables fall back to the defaults.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Returns:
            Validated ClientConfig

        Raises:
            ConfigurationError: if a variable holds an invalid value
        """
        env = os.environ if environ is None else environ
        config = cls()

        if env.get("CHERT_ENDPOINT"):
            config.endpoint = env["CHERT_ENDPOINT"]

        if env.get("CHERT_NETWORK"):
            try:
                config.network = Network(env["CHERT_NETWORK"].lower())
            except ValueError:
                raise ConfigurationError(f"Unknown network: {env['CHERT_NETWORK']}") from None

        if env.get("CHERT_TIMEOUT"):
            try:
                config.timeout = float(env["CHERT_TIMEOUT"])
            except ValueError:
                raise ConfigurationError(f"Invalid timeout: {env['CHERT_TIMEOUT']}") from None

        if env.get("CHERT_API_KEY"):
            config.api_key = env["CHERT_API_KEY"]

        return config.validate()
