import asyncio

from .config import load_config
from .logsetup import setup_logging
from .server import build_server, serve_stdio


def main():
    cfg = load_config()
    log = setup_logging(cfg.hive.log_level)
    log.info("hive_client_init", api_key_prefix=cfg.hive.api_key[:8] + "...")
    server = build_server(cfg)
    log.info("server_started", transport="stdio", name=cfg.server.name, version=cfg.server.version)
    try:
        asyncio.run(serve_stdio(server))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
