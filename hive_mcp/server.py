# hive_mcp/server.py
import asyncio
import json
import sys
import threading
from typing import Any, Dict, Optional, Set

import structlog

from .config import AppConfig, ServerConfig
from .errors import ErrorCode, McpError, normalize_error
from .hive_client import HiveSearchClient
from .shaping import shape_response, to_tool_result
from .validation import build_search_request, validate_arguments

log = structlog.get_logger(__name__)

TOOL_NAME = "search"

SEARCH_TOOL: Dict[str, Any] = {
    "name": TOOL_NAME,
    "description": (
        "Search for crypto and Web3 intelligence using the Hive Intelligence API. "
        "Supports both prompt-based and chat-style queries. Get answers to questions on "
        "Blockchain Data Querying, DeFi Analytics, Wallet & Portfolio Tracking, "
        "Market Data (like price and volume), and Cross-chain Data Aggregation."
    ),
    "inputSchema": {
        "type": "object",
        "properties": {
            "prompt": {
                "type": "string",
                "description": "A plaintext question or query about crypto/Web3 topics",
            },
            "messages": {
                "type": "array",
                "description": "Array of chat messages for conversational queries",
                "items": {
                    "type": "object",
                    "properties": {
                        "role": {
                            "type": "string",
                            "enum": ["user", "assistant"],
                            "description": "The role of the message sender",
                        },
                        "content": {
                            "type": "string",
                            "description": "The content of the message",
                        },
                    },
                    "required": ["role", "content"],
                },
            },
            "include_data_sources": {
                "type": "boolean",
                "description": "Whether to include source information in the response",
            },
        },
        "oneOf": [
            {"required": ["prompt"]},
            {"required": ["messages"]},
        ],
    },
}


class HiveMCPServer:
    def __init__(self, client: HiveSearchClient, info: Optional[ServerConfig] = None):
        self.client = client
        self.info = info or ServerConfig()
        self.handlers = {
            "initialize": self._handle_initialize,
            "ping": self._handle_ping,
            "tools/list": self._handle_tools_list,
            "tools/call": self._handle_tools_call,
        }

    # ---- operations ----

    def list_tools(self) -> Dict[str, Any]:
        return {"tools": [SEARCH_TOOL]}

    async def call_tool(self, name: Optional[str], arguments: Any) -> Dict[str, Any]:
        """Run one search; every failure is raised as an McpError."""
        if name != TOOL_NAME:
            raise McpError(ErrorCode.METHOD_NOT_FOUND, f"Unknown tool: {name}")

        validate_arguments(arguments)
        try:
            req = build_search_request(arguments)
            resp = await self.client.search(req)
            result = shape_response(resp)
        except Exception as e:
            err = normalize_error(e)
            log.error("search_failed", error=err.message, kind=type(e).__name__)
            raise err from e
        return to_tool_result(result).to_dict()

    # ---- JSON-RPC handlers ----

    async def _handle_initialize(self, params: dict) -> dict:
        return {
            "protocolVersion": params.get("protocolVersion") or self.info.protocol_version,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self.info.name, "version": self.info.version},
        }

    async def _handle_ping(self, params: dict) -> dict:
        return {}

    async def _handle_tools_list(self, params: dict) -> dict:
        return self.list_tools()

    async def _handle_tools_call(self, params: dict) -> dict:
        return await self.call_tool(params.get("name"), params.get("arguments"))

    async def handle(self, msg: Any) -> Optional[dict]:
        """Process one decoded frame; returns the reply, or None for notifications."""
        if isinstance(msg, dict) and "method" not in msg and ("result" in msg or "error" in msg):
            # replies from the client are never answered
            log.debug("client_reply_ignored", id=msg.get("id"))
            return None
        if not isinstance(msg, dict) or not isinstance(msg.get("method"), str):
            mid = msg.get("id") if isinstance(msg, dict) else None
            return _error_reply(mid, McpError(ErrorCode.INVALID_REQUEST, "Invalid Request"))

        method = msg["method"]
        if "id" not in msg:
            log.debug("notification", method=method)
            return None

        mid = msg["id"]
        params = msg.get("params")
        if params is None:
            params = {}
        if not isinstance(params, dict):
            return _error_reply(mid, McpError(ErrorCode.INVALID_PARAMS, "Invalid params"))
        h = self.handlers.get(method)
        if not h:
            log.warning("unknown_method", method=method)
            return _error_reply(mid, McpError(ErrorCode.METHOD_NOT_FOUND, f"Method not found: {method}"))
        try:
            return {"jsonrpc": "2.0", "id": mid, "result": await h(params)}
        except McpError as e:
            return _error_reply(mid, e)
        except Exception as e:
            log.exception("handler_crashed", method=method)
            return _error_reply(mid, normalize_error(e))


def _error_reply(mid, err: McpError) -> dict:
    return {"jsonrpc": "2.0", "id": mid, "error": err.to_dict()}


def _start_reader(stdin, loop: asyncio.AbstractEventLoop) -> "asyncio.Queue[str]":
    """Feed stdin lines into a queue from a daemon thread; "" marks EOF."""
    lines: "asyncio.Queue[str]" = asyncio.Queue()

    def _pump():
        try:
            for line in iter(stdin.readline, ""):
                loop.call_soon_threadsafe(lines.put_nowait, line)
        finally:
            try:
                loop.call_soon_threadsafe(lines.put_nowait, "")
            except RuntimeError:
                pass  # loop already closed

    threading.Thread(target=_pump, name="stdin-reader", daemon=True).start()
    return lines


def _send(msg: dict, out) -> None:
    out.write(json.dumps(msg, ensure_ascii=False) + "\n")
    out.flush()


async def serve_stdio(server: HiveMCPServer, stdin=None, stdout=None) -> None:
    """Read newline-delimited JSON-RPC frames until EOF; each call runs as its own task."""
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    lines = _start_reader(stdin, asyncio.get_running_loop())
    pending: Set[asyncio.Task] = set()

    async def _dispatch(msg):
        reply = await server.handle(msg)
        if reply is not None:
            _send(reply, stdout)

    while True:
        line = await lines.get()
        if not line:
            break
        raw = line.strip()
        if not raw:
            continue
        try:
            msg = json.loads(raw)
        except json.JSONDecodeError:
            log.warning("non_json_frame", raw=raw[:200])
            _send(_error_reply(None, McpError(ErrorCode.PARSE_ERROR, "Parse error")), stdout)
            continue
        task = asyncio.create_task(_dispatch(msg))
        pending.add(task)
        task.add_done_callback(pending.discard)

    if pending:
        await asyncio.gather(*pending)


def build_server(cfg: AppConfig) -> HiveMCPServer:
    return HiveMCPServer(HiveSearchClient.from_config(cfg.hive), cfg.server)
