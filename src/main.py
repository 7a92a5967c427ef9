"""Entry point for the browser to PSTN bridge service."""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from api.routes import router as api_router
from bridge.errors import ConfigurationError
from config.settings import get_settings
from integrations.bandwidth import get_bandwidth_config

LOGGER = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Refuse to serve without credentials.
    get_bandwidth_config()
    yield


settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

app = FastAPI(
    title="WebRTC PSTN Bridge",
    description="Bridges a browser WebRTC session with an outbound phone call.",
    lifespan=lifespan,
)
app.include_router(api_router)

# Mounted last so the API routes take precedence.
if settings.static_dir.is_dir():
    app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")


def main() -> None:
    try:
        get_bandwidth_config()
    except ConfigurationError as exc:
        LOGGER.error("ERROR! %s", exc.detail)
        sys.exit(1)

    import uvicorn

    LOGGER.info("Example app listening on http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
