"""CLI entrypoint for the thetatools MCP server."""
from __future__ import annotations
import argparse
import json
import os
import pathlib
import sys

from .core.config_loader import API_KEY_ENV, CONFIG_FILE_ENV, ConfigError, MissingApiKeyError, load_config, mask_secret
from .core.logging import enable_file_logging

API_KEYS_URL = "https://www.thetaedgecloud.com/dashboard/api-keys"

EXAMPLE_CLIENT_CONFIG = {
    "mcpServers": {
        "theta-edgecloud": {
            "command": "thetatools-mcp",
            "args": ["serve"],
            "env": {API_KEY_ENV: "your-api-key-here"},
        },
    },
}


def build_parser():
    p = argparse.ArgumentParser(prog="thetatools-mcp", description="Theta EdgeCloud On-Demand API MCP Server")
    sub = p.add_subparsers(dest="command")
    serve = sub.add_parser("serve", help="Start MCP server")
    serve.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="stdio for desktop MCP clients, http for streamable-http plus /health,/tools,/metrics",
    )
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)
    serve.add_argument("--config", help=f"YAML config file (overrides ${CONFIG_FILE_ENV})")
    serve.add_argument(
        "--log-dir",
        help="Directory to write log file (thetatools.log). If not set, only stderr is used.",
    )
    return p


def print_missing_key_help(message: str, stream=None):
    stream = stream or sys.stderr
    print(f"Error: {message}", file=stream)
    print("", file=stream)
    print(f"Get your API key from: {API_KEYS_URL}", file=stream)
    print("", file=stream)
    print("Then set it in your MCP config:", file=stream)
    print(json.dumps(EXAMPLE_CLIENT_CONFIG, indent=2), file=stream)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command != "serve":
        parser.print_help(sys.stderr)
        return 1
    if getattr(args, "log_dir", None):
        log_dir_path = pathlib.Path(args.log_dir).resolve()
        # loggers created later read the env var; existing ones get a handler now
        os.environ["THETATOOLS_LOG_DIR"] = str(log_dir_path)
        try:
            enable_file_logging(str(log_dir_path))
        except OSError as e:
            print(f"Error: cannot write logs to {log_dir_path}: {e}", file=sys.stderr)
            return 1

    try:
        config = load_config(args.config)
    except MissingApiKeyError as e:
        print_missing_key_help(str(e))
        return 1
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    from .api.client import get_client
    from .core.logging import core_logger
    from .mcp_server import create_app, create_mcp

    core_logger.info("API key received: %s", mask_secret(config.api_key))
    get_client(config)

    if args.transport == "http":
        import uvicorn
        core_logger.info("Theta EdgeCloud On-Demand API MCP Server on http://%s:%d", args.host, args.port)
        uvicorn.run(create_app(), host=args.host, port=args.port)
    else:
        core_logger.info("Theta EdgeCloud On-Demand API MCP Server running (stdio)")
        create_mcp().run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
