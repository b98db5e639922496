import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import load_dotenv


class ConfigError(RuntimeError):
    pass


# ---------- Hive ----------
@dataclass
class HiveConfig:
    api_key: str
    base_url: str = "https://api.hiveintelligence.xyz"
    search_path: str = "/v1/search"
    request_timeout_s: Optional[float] = None   # None: wait for the provider indefinitely
    log_level: str = "INFO"

# ---------- Server ----------
@dataclass
class ServerConfig:
    name: str = "hive-mcp-server"
    version: str = "0.1.0"
    protocol_version: str = "2024-11-05"

# ---------- AppConfig ----------
@dataclass
class AppConfig:
    hive: HiveConfig
    server: ServerConfig = field(default_factory=ServerConfig)


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as e:
        raise ConfigError(f"HIVE_REQUEST_TIMEOUT must be a number of seconds, got {raw!r}") from e
    if value <= 0:
        raise ConfigError(f"HIVE_REQUEST_TIMEOUT must be positive, got {raw!r}")
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """Build the app config once at startup.

    ``env`` defaults to ``os.environ`` after ``.env`` is loaded. A missing
    ``HIVE_API_KEY`` is fatal: the server must not start without it.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    api_key = (env.get("HIVE_API_KEY") or "").strip()
    if not api_key:
        raise ConfigError("HIVE_API_KEY environment variable is required")

    hive = HiveConfig(
        api_key=api_key,
        base_url=(env.get("HIVE_BASE_URL") or HiveConfig.base_url).rstrip("/"),
        request_timeout_s=_parse_timeout(env.get("HIVE_REQUEST_TIMEOUT")),
        log_level=(env.get("HIVE_LOG_LEVEL") or HiveConfig.log_level).upper(),
    )
    return AppConfig(hive=hive)
