from .errors import ErrorCode, McpError, NetworkError, ProviderError, RequestTimeout, UnknownError
from .hive_client import HiveSearchClient
from .server import HiveMCPServer, SEARCH_TOOL

__all__ = [
    "ErrorCode",
    "McpError",
    "NetworkError",
    "ProviderError",
    "RequestTimeout",
    "UnknownError",
    "HiveSearchClient",
    "HiveMCPServer",
    "SEARCH_TOOL",
]
