"""
Execution-Layer JSON-RPC

Minimal JSON-RPC 2.0 client for reading block headers from an
execution-layer node (eth_getBlockByNumber).
"""

from __future__ import annotations

import itertools
import logging
from typing import Any, Optional

from core.http.client import HttpClient, HttpError
from core.schemas.errors import RpcException


logger = logging.getLogger(__name__)


class JsonRpcClient:
    """
    JSON-RPC client bound to one endpoint.

    Usage:
        rpc = JsonRpcClient("http://localhost:8545")
        header = rpc.get_block("latest")
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 30.0,
        http: Optional[HttpClient] = None,
    ) -> None:
        self.url = url
        self.http = http or HttpClient(
            timeout=timeout,
            default_headers={"Content-Type": "application/json"},
        )
        self._ids = itertools.count(1)

    def call(self, method: str, params: list[Any] | None = None) -> Any:
        """
        Invoke a JSON-RPC method and return its result.

        Raises:
            RpcException: On transport failure, non-2xx status or RPC error
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }
        logger.debug(f"RPC {method} -> {self.url}")
        try:
            response = self.http.post(self.url, json=payload)
            response.raise_for_status()
            body = response.json()
        except HttpError as e:
            raise RpcException(
                f"RPC transport error calling {method}: {e}",
                details={"method": method, "url": self.url, "status_code": e.status_code},
            ) from e
        except ValueError as e:
            raise RpcException(
                f"RPC returned invalid JSON for {method}",
                details={"method": method, "url": self.url},
            ) from e

        if not isinstance(body, dict):
            raise RpcException(
                f"RPC returned a non-object response for {method}",
                details={"method": method},
            )
        if body.get("error"):
            error = body["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise RpcException(
                f"RPC error calling {method}: {message}",
                details={"method": method, "rpc_error": error},
            )
        return body.get("result")

    def get_block(self, block: str | int = "latest") -> dict[str, Any]:
        """
        Fetch a block header (without full transactions).

        Args:
            block: "latest", "finalized", ... or a block number, as an int
                or a decimal string ("16"); numbers are sent hex-encoded

        Raises:
            RpcException: If the node has no such block
        """
        if isinstance(block, str) and block.isdigit():
            block = int(block)
        tag = hex(block) if isinstance(block, int) else block
        result = self.call("eth_getBlockByNumber", [tag, False])
        if result is None:
            raise RpcException(
                f"Block {block} not found",
                details={"block": str(block)},
            )
        return result

    def close(self) -> None:
        self.http.close()


__all__ = ["JsonRpcClient"]
