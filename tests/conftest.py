"""Pytest config: PYTHONPATH, env and a fake Hive provider."""
import logging
import os
import sys
from pathlib import Path

import httpx
import pytest
import structlog

root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))
os.environ.setdefault("HIVE_API_KEY", "hive-test-dummy")

from hive_mcp.hive_client import HiveSearchClient  # noqa: E402


class FakeHive:
    """Records requests and answers them through httpx.MockTransport."""

    def __init__(self, handler):
        self.handler = handler
        self.requests = []

    def transport(self):
        async def _handle(request: httpx.Request):
            self.requests.append(request)
            resp = self.handler(request)
            if hasattr(resp, "__await__"):
                resp = await resp
            return resp
        return httpx.MockTransport(_handle)

    def client(self, **kw) -> HiveSearchClient:
        return HiveSearchClient("hive-test-key", transport=self.transport(), **kw)


@pytest.fixture
def fake_hive():
    def _make(handler):
        return FakeHive(handler)
    return _make


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo any global logging setup a test performed."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
