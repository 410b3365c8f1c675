"""Software-only simulation / demo - no real systems will be contacted or modified."""
from __future__ import annotations

import uvicorn

from .config import get_settings


def run() -> None:
    settings = get_settings()
    uvicorn.run("hotelfinder.backend.app:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
