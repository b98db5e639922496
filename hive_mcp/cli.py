import argparse
import asyncio
import json
import sys

from rich.console import Console
from rich.markup import escape

from .config import load_config
from .errors import McpError
from .logsetup import setup_logging
from .server import TOOL_NAME, build_server


async def run_once(server, args: dict):
    return await server.call_tool(TOOL_NAME, args)


def main(argv=None):
    parser = argparse.ArgumentParser(prog="hive-search", description="Ask Hive Intelligence one question.")
    parser.add_argument("prompt", help="question about crypto/Web3")
    parser.add_argument("--sources", action="store_true", help="include data sources")
    ns = parser.parse_args(argv)

    cons = Console()
    cfg = load_config()
    setup_logging("WARNING")
    server = build_server(cfg)

    args = {"prompt": ns.prompt}
    if ns.sources:
        args["include_data_sources"] = True
    try:
        result = asyncio.run(run_once(server, args))
    except McpError as e:
        cons.print(f"[red]Error ({e.code.name}):[/red] {escape(e.message)}")
        return 1

    payload = json.loads(result["content"][0]["text"])
    cons.print(payload.get("response") or "", markup=False)
    for i, src in enumerate(payload.get("data_sources") or [], 1):
        text = src if isinstance(src, str) else json.dumps(src, ensure_ascii=False)
        cons.print(f"[{i}] {text}", style="dim", markup=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
