"""Run the notes API under uvicorn, configured from the environment."""

import os

import structlog
import uvicorn
from dotenv import load_dotenv

load_dotenv()

logger = structlog.get_logger(__name__)

APP_PATH = "notes_api.app:app"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in ("1", "true", "yes")


def run_server(host: str | None = None, port: int | None = None, reload: bool | None = None):
    """
    Serve the API. Arguments override OCEAN_NOTES_HOST, OCEAN_NOTES_PORT
    and OCEAN_NOTES_RELOAD; the default bind is 127.0.0.1:8000 so notes
    stay on this machine.
    """
    host = host or os.getenv("OCEAN_NOTES_HOST", "127.0.0.1")
    port = port or int(os.getenv("OCEAN_NOTES_PORT", "8000"))
    if reload is None:
        reload = _env_flag("OCEAN_NOTES_RELOAD")

    logger.info("server_starting", host=host, port=port, reload=reload)
    uvicorn.run(
        APP_PATH,
        host=host,
        port=port,
        reload=reload,
        log_level="info",
        access_log=False,
    )


if __name__ == "__main__":
    run_server()
