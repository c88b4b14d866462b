"""
JSON-RPC transport for the Chert node API
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from http.cookiejar import DefaultCookiePolicy
from typing import Any, Dict, List, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from requests.structures import CaseInsensitiveDict

from .config import ClientConfig
from .errors import ApiError, NetworkError, ProtocolError

logger = logging.getLogger(__name__)

JSONRPC_VERSION = "2.0"

# One outstanding call per invocation, so a constant id is enough.
REQUEST_ID = 1


@dataclass
class RpcRequest:
    """JSON-RPC request envelope"""
    method: str
    params: List[Any] = field(default_factory=list)
    id: Any = REQUEST_ID
    jsonrpc: str = JSONRPC_VERSION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jsonrpc": self.jsonrpc,
            "method": self.method,
            "params": self.params,
            "id": self.id,
        }


@dataclass
class RpcError:
    """JSON-RPC error member"""
    code: int
    message: str
    data: Any = None


def build_request(method: str, params: Optional[Sequence[Any]] = None) -> RpcRequest:
    """
    Build a request envelope.

    Params are kept in order; objects exposing to_dict() are serialized
    through it.
    """
    return RpcRequest(method=method, params=[_to_wire(p) for p in (params or [])])


def parse_response(body: Any) -> Any:
    """
    Decode a response envelope.

    Args:
        body: Parsed JSON body

    Returns:
        The "result" member (may be None)

    Raises:
        ApiError: if the envelope carries an "error" member
        ProtocolError: if the body is not a well-formed response envelope
    """
    if not isinstance(body, dict):
        raise ProtocolError("invalid response")

    error = body.get("error")
    if error is not None:
        rpc_error = _parse_error(error)
        raise ApiError(rpc_error.message, rpc_code=rpc_error.code, data=rpc_error.data)

    if "result" not in body:
        raise ProtocolError("invalid response")
    return body["result"]


def _parse_error(error: Any) -> RpcError:
    if not isinstance(error, dict) or "code" not in error:
        raise ProtocolError("invalid response")
    try:
        code = int(error["code"])
    except (TypeError, ValueError):
        raise ProtocolError("invalid response") from None
    return RpcError(code=code, message=str(error.get("message", "")), data=error.get("data"))


def _to_wire(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return value


class RpcTransport:
    """
    Sends JSON-RPC calls to a single endpoint.

    Owns the HTTP connection pool (a requests.Session). Create one per client
    and close it when done, either explicitly or as a context manager:

        >>> async with RpcTransport(ClientConfig(endpoint="http://localhost:8545")) as transport:
        ...     status = await transport.call("getNetworkStatus")

    The blocking HTTP round trip runs in a worker thread, so concurrent calls
    on the same transport do not block the event loop.
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        """
        Initialize the transport.

        Args:
            config: Client configuration (default: ClientConfig())
        """
        self.config = (config or ClientConfig()).validate()
        # Shared by worker threads: headers and adapters are fixed here and
        # cookies are never stored, so calls do not mutate session state.
        self.session = requests.Session()
        self.session.cookies.set_policy(DefaultCookiePolicy(allowed_domains=[]))
        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=self.config.pool_size)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        self.session.headers.update(self._default_headers())
        self._closed = False

    def _default_headers(self) -> CaseInsensitiveDict:
        headers = CaseInsensitiveDict({'Content-Type': 'application/json'})
        if self.config.api_key:
            headers['Authorization'] = f"Bearer {self.config.api_key}"
        headers.update(self.config.headers)
        # responses are always decoded as JSON
        headers['Accept'] = 'application/json'
        return headers

    @property
    def endpoint(self) -> str:
        return self.config.endpoint

    @property
    def closed(self) -> bool:
        return self._closed

    async def call(self, method: str, params: Optional[Sequence[Any]] = None) -> Any:
        """
        Make an RPC call.

        Args:
            method: RPC method name
            params: Positional parameters

        Returns:
            The "result" member of the response

        Raises:
            NetworkError: if the HTTP round trip fails
            ApiError: on a non-2xx status or an RPC error response
            ProtocolError: if the response is not a valid envelope
        """
        if self._closed:
            raise NetworkError("Transport is closed")

        request = build_request(method, params)
        payload = json.dumps(request.to_dict())
        logger.debug("rpc call %s (%d params)", method, len(request.params))

        response = await asyncio.to_thread(self._post, payload)

        result = self._decode(method, response)
        logger.debug("rpc call %s ok", method)
        return result

    def _post(self, payload: str) -> requests.Response:
        try:
            return self.session.post(
                self.config.endpoint,
                data=payload,
                timeout=self.config.timeout,
            )
        except requests.Timeout as e:
            raise NetworkError(f"Request timed out after {self.config.timeout}s") from e
        except requests.RequestException as e:
            raise NetworkError(f"Request failed: {e}") from e

    def _decode(self, method: str, response: requests.Response) -> Any:
        if not 200 <= response.status_code < 300:
            logger.debug("rpc call %s failed with HTTP %d", method, response.status_code)
            raise ApiError(
                f"HTTP {response.status_code}: {response.reason or 'request failed'}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise ProtocolError("invalid response") from e

        try:
            return parse_response(body)
        except ApiError as e:
            logger.debug("rpc call %s returned error %s: %s", method, e.rpc_code, e.message)
            raise

    def close(self):
        """Close the session"""
        if not self._closed:
            self.session.close()
            self._closed = True

    async def aclose(self):
        """Close the session from async code"""
        self.close()

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
