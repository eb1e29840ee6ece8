from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from league_repo import LeagueRepo
from random_source import RandomSource
from app.api.router import api_router

logger = logging.getLogger(__name__)

app = FastAPI(title="Player model server")


@app.on_event("startup")
def _startup_init_state() -> None:
    # 1) DB schema init (per db_path)
    # 2) one RandomSource for the process, seeded when LEAGUE_RNG_SEED is set (integer or any string)
    db_path = os.environ.get(config.ENV_DB_PATH)
    if not db_path:
        raise RuntimeError(f"{config.ENV_DB_PATH} is required (no default db_path).")

    with LeagueRepo(db_path) as repo:
        repo.init_db()

    seed_raw = (os.environ.get(config.ENV_RNG_SEED) or "").strip()
    if not seed_raw:
        app.state.rng = RandomSource()
    elif seed_raw.lstrip("-").isdigit():
        app.state.rng = RandomSource(int(seed_raw))
    else:
        app.state.rng = RandomSource.from_parts(seed_raw)
    logger.info("SERVER_STARTUP db_path=%s seeded=%s", db_path, bool(seed_raw))


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)
