"""
JSON-RPC Client

Minimal execution-layer JSON-RPC client (eth_call, eth_chainId) over the
shared HTTP client.
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Optional

from beacon_core.crypto.hashing import from_hex, to_hex
from beacon_core.http.client import HttpClient, HttpError
from beacon_core.schemas.errors import RpcException

logger = logging.getLogger(__name__)


class JsonRpcClient:
    """
    JSON-RPC 2.0 client for an Ethereum execution node.

    Usage:
        rpc = JsonRpcClient("http://localhost:8545")
        chain_id = rpc.chain_id()
        result = rpc.eth_call("0x4D58...", calldata)
    """

    def __init__(
        self,
        endpoint: str,
        *,
        http: Optional[HttpClient] = None,
        timeout: float = 10.0,
    ) -> None:
        self.endpoint = endpoint
        self.http = http or HttpClient(timeout=timeout)
        self._ids = itertools.count(1)

    def call(self, method: str, params: list[Any]) -> Any:
        """
        Send one JSON-RPC request and return its result.

        Raises:
            RpcException: transport failure, non-2xx status, malformed
                response, or a JSON-RPC error object
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }

        try:
            response = self.http.post(self.endpoint, json=payload)
        except HttpError as e:
            raise RpcException(f"{method} failed: {e}", method=method, retryable=True) from e

        if not response.ok:
            raise RpcException(
                f"{method} failed with HTTP {response.status_code}",
                method=method,
                details={"status_code": response.status_code},
                retryable=response.status_code >= 500,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RpcException(f"{method} returned invalid JSON: {e}", method=method) from e

        if not isinstance(body, dict):
            raise RpcException(f"{method} returned a non-object response", method=method)

        error = body.get("error")
        if error:
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            raise RpcException(
                f"{method} error: {message}",
                method=method,
                rpc_code=code,
                details={"data": error.get("data")} if isinstance(error, dict) else None,
            )

        if "result" not in body:
            raise RpcException(f"{method} response has no result", method=method)

        return body["result"]

    def chain_id(self) -> int:
        """Return the node's chain id."""
        result = self.call("eth_chainId", [])
        try:
            return int(result, 16)
        except (TypeError, ValueError) as e:
            raise RpcException(f"eth_chainId returned {result!r}: {e}", method="eth_chainId") from e

    def eth_call(self, to: str, data: bytes, block: str = "latest") -> bytes:
        """
        Execute a read-only contract call.

        Args:
            to: Contract address (0x hex)
            data: ABI-encoded calldata
            block: Block tag or number

        Returns:
            Raw return data
        """
        result = self.call("eth_call", [{"to": to, "data": to_hex(data)}, block])
        if not isinstance(result, str):
            raise RpcException("eth_call result is not a hex string", method="eth_call")
        try:
            return from_hex(result)
        except ValueError as e:
            raise RpcException(f"eth_call returned invalid hex: {e}", method="eth_call") from e

    def close(self) -> None:
        self.http.close()
