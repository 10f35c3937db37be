from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bottleup_node import __version__
from bottleup_node import config as node_config
from bottleup_node.api import accounts, admins, leaderboard, rewards, submissions
from bottleup_node.bottleup_executor import executor

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def create_app() -> FastAPI:
    cfg = executor.cfg
    logging.basicConfig(level=node_config.get_log_level(cfg), format=LOG_FORMAT)

    app = FastAPI(title="BottleUp Node API", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=node_config.get_cors_origins(cfg),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(accounts.router)
    app.include_router(submissions.router)
    app.include_router(rewards.router)
    app.include_router(leaderboard.router)
    app.include_router(admins.router)

    @app.get("/health")
    def health():
        return {
            "ok": True,
            "accounts": len(executor.ledger.registry),
            "persistence": node_config.get_persistence_driver(cfg),
            "degraded": executor.degraded,
        }

    log.info("BottleUp API ready (owner=%s)", executor.gate.owner)
    return app


app = create_app()
