# bottleup_node/__main__.py
"""
Entry point for running the BottleUp Node as a module:
    python -m bottleup_node [--host 0.0.0.0] [--port 8000] [--data-dir ./data]
                            [--log-level INFO]
Env toggles:
  BOTTLEUP_OWNER=...          -> owner identity (admin management)
  BOTTLEUP_PERSISTENCE=json   -> snapshot state to BOTTLEUP_DATA_DIR
  BOTTLEUP_EXCHANGE_RATE=10   -> bottles per credit unit
"""

from __future__ import annotations

import argparse
import os

import uvicorn


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="bottleup-node",
        description="Run the BottleUp recycling reward ledger (HTTP API)",
    )
    p.add_argument(
        "--host",
        default=os.environ.get("BOTTLEUP_HOST"),
        help="Bind address (default: config server.host)",
    )
    p.add_argument(
        "--port",
        type=int,
        default=int(os.environ["BOTTLEUP_PORT"]) if os.environ.get("BOTTLEUP_PORT") else None,
        help="HTTP port (default: config server.port)",
    )
    p.add_argument(
        "--data-dir",
        default=None,
        help="Persist ledger snapshots to this directory (enables json persistence)",
    )
    p.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: config logging.level)",
    )
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    # The executor reads its config at import time, so overrides go into ENV first.
    if args.data_dir:
        os.environ["BOTTLEUP_DATA_DIR"] = args.data_dir
        os.environ["BOTTLEUP_PERSISTENCE"] = "json"
    if args.log_level:
        os.environ["BOTTLEUP_LOG_LEVEL"] = args.log_level

    from . import config as node_config
    from .bottleup_api import app
    from .bottleup_executor import executor

    host = args.host or node_config.get_bind_host(executor.cfg)
    port = args.port or node_config.get_bind_port(executor.cfg)

    uvicorn.run(app, host=host, port=port, log_level=node_config.get_log_level(executor.cfg).lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
