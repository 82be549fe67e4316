# mediahub_backend/app/routers/health.py
from __future__ import annotations

import os

from fastapi import APIRouter, Request

from ..database import check_connection

router = APIRouter(tags=["health"])


@router.get("/api")
def api_check():
    return {"message": "API is working!"}


@router.get("/health/")
def health(request: Request):
    storage = request.app.state.storage
    status = {
        "database": "unknown",
        "storage": "unknown",
        "upload_dir": str(storage.root),
    }

    # 1) DB check
    try:
        check_connection(request.app.state.engine)
        status["database"] = "ok"
    except Exception as e:
        status["database"] = f"error: {e!r}"

    # 2) content directory check
    if not storage.root.is_dir():
        status["storage"] = "error: missing"
    elif not os.access(storage.root, os.W_OK):
        status["storage"] = "error: not writable"
    else:
        status["storage"] = "ok"

    return status
