"""Error taxonomy for the search tool.

Gateway failures arrive as one of the ``HiveFailure`` variants; everything that
reaches the protocol is an ``McpError``. ``normalize_error`` is the single
place that turns the former (or anything else) into the latter.
"""
import json
from enum import IntEnum
from typing import Any, Dict, Optional


class ErrorCode(IntEnum):
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603


class McpError(Exception):
    """Protocol-level error returned to the caller as a JSON-RPC ``error``."""

    def __init__(self, code: ErrorCode, message: str, data: Any = None):
        self.code = ErrorCode(code)
        self.message = message
        self.data = data
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        err: Dict[str, Any] = {"code": int(self.code), "message": self.message}
        if self.data is not None:
            err["data"] = self.data
        return err

    def __repr__(self):
        return f"McpError({self.code.name}, {self.message!r})"


# ---------- gateway failures ----------
class HiveFailure(Exception):
    pass


class ProviderError(HiveFailure):
    """Hive answered with a non-2xx status."""

    def __init__(self, status: int, status_text: str, body: Any = None):
        self.status = status
        self.status_text = status_text
        self.body = body
        super().__init__(f"{status} {status_text}")


class NetworkError(HiveFailure):
    """Hive could not be reached (DNS failure, refused connection)."""

    def __init__(self, code: str, message: str = ""):
        self.code = code
        super().__init__(message or code)


class RequestTimeout(HiveFailure):
    def __init__(self, timeout_s: float):
        self.timeout_s = timeout_s
        super().__init__(f"Hive API request timed out after {timeout_s:g} seconds")


class UnknownError(HiveFailure):
    pass


TIMEOUT_MESSAGE = "Hive API request timed out. The service may be slow or unavailable."
NETWORK_MESSAGE = "Network error: Unable to connect to Hive Intelligence API"
FALLBACK_MESSAGE = "An error occurred while searching"


def _details_for(exc: BaseException) -> Optional[str]:
    if isinstance(exc, ProviderError):
        # empty containers are still reported; blank scalars are not
        if exc.body is None or (not exc.body and not isinstance(exc.body, (dict, list))):
            return None
        return json.dumps(exc.body, indent=2, ensure_ascii=False)
    if isinstance(exc, NetworkError):
        return f"Connection error: {exc.code}"
    return None


def _message_for(exc: BaseException) -> str:
    if isinstance(exc, RequestTimeout):
        return TIMEOUT_MESSAGE
    if isinstance(exc, ProviderError):
        return f"Hive API Error: {exc.status} {exc.status_text}"
    if isinstance(exc, NetworkError):
        return NETWORK_MESSAGE
    return str(exc) or FALLBACK_MESSAGE


def normalize_error(exc: BaseException) -> McpError:
    """Map any failure from validation, building or the gateway to one McpError."""
    if isinstance(exc, McpError):
        return exc
    message = _message_for(exc)
    details = _details_for(exc)
    if details:
        message = f"{message}\n\nDetails:\n{details}"
    return McpError(ErrorCode.INTERNAL_ERROR, message)
