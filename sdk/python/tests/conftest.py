"""Shared fixtures: a fake requests adapter standing in for the node."""

import json
from typing import Any, List

import pytest
import requests
from requests.adapters import BaseAdapter

from chert_sdk import ChertClient, ClientConfig, RpcTransport

ENDPOINT = "http://node.test/rpc"


class FakeAdapter(BaseAdapter):
    """Returns queued (status, body) replies; exceptions in the queue are raised.

    The last reply repeats once the queue is down to one item.
    """

    def __init__(self, replies: List[Any]):
        super().__init__()
        self.replies = list(replies)
        self.requests: List[requests.PreparedRequest] = []

    def send(self, request, **kwargs):
        self.requests.append(request)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply

        status, body = reply
        response = requests.Response()
        response.status_code = status
        response.reason = "OK" if status < 400 else "Error"
        response._content = body if isinstance(body, bytes) else json.dumps(body).encode()
        response.encoding = "utf-8"
        response.headers["Content-Type"] = "application/json"
        response.request = request
        response.url = request.url
        return response

    def close(self):
        pass

    @property
    def payloads(self) -> List[dict]:
        return [json.loads(r.body) for r in self.requests]


def rpc_result(result: Any) -> dict:
    return {"jsonrpc": "2.0", "result": result, "id": 1}


def make_transport(*replies, **config_kwargs):
    config = ClientConfig(endpoint=ENDPOINT, **config_kwargs)
    transport = RpcTransport(config)
    adapter = FakeAdapter(list(replies))
    transport.session.mount("http://node.test", adapter)
    return transport, adapter


@pytest.fixture
def node():
    """Factory returning (ChertClient, FakeAdapter) wired to canned replies."""
    clients = []

    def factory(*replies, **config_kwargs):
        transport, adapter = make_transport(*replies, **config_kwargs)
        client = ChertClient(transport=transport)
        clients.append(client)
        return client, adapter

    yield factory
    for client in clients:
        client.close()


def tx_json(status: str, tx_hash: str = "ab" * 32) -> dict:
    return {
        "hash": tx_hash,
        "from": "chert_" + "1" * 40,
        "to": "chert_" + "2" * 40,
        "amount": "50.0",
        "fee": "0.05",
        "memo": None,
        "block_height": 12 if status == "confirmed" else None,
        "status": status,
        "timestamp": "2026-01-01T00:00:00Z",
        "nonce": 3,
    }
