# gs1scan/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gs1scan.api.routers.scan import router as scan_router
from gs1scan.core.config import get_settings
from gs1scan.core.logging import setup_logging
from gs1scan.http_problem_handlers import register_exception_handlers

_settings = get_settings()
setup_logging(_settings.LOG_LEVEL, json=_settings.JSON_LOG)
logger = logging.getLogger("gs1scan")

app = FastAPI(
    title="GS1-SCAN",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://127.0.0.1:5173",
        "http://localhost:5173",
        "http://127.0.0.1:8000",
        "http://localhost:8000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(scan_router)


@app.get("/")
async def root():
    return {"name": "GS1-SCAN", "version": "1.0.0"}


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


logger.info("gs1scan app ready (env=%s)", _settings.ENV)
