"""FastAPI application."""

import argparse
import logging
from typing import Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from configs import get_settings
from price_compare.controllers.search_controllers import search_router
from price_compare.logger_config import configure_logging


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build the API with routers and CORS configured from settings."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    logger.info("Starting FastAPI application...")
    application = FastAPI(
        title="Price Compare API",
        root_path=settings.ROOT_PATH_BACKEND,
        description="Compare product prices found by several search engines.",
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(search_router)

    @application.get("/", response_description="Api healthcheck")  # type: ignore[misc]
    async def index() -> Dict[str, str]:
        """Define a route for handling HTTP GET requests to the root URL ("/")."""
        return {"status": "ok"}

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    parser = argparse.ArgumentParser()
    parser.add_argument("--docker", action="store_true", help="Running with docker")
    parser.add_argument("--host", required=True, help="Application host.")
    parser.add_argument("--port", required=True, help="Application port.")
    parser.add_argument(
        "--reload",
        required=False,
        help="Enable auto-reload for development purposes.",
    )
    args = parser.parse_args()
    if not args.docker:
        from dotenv import load_dotenv

        load_dotenv(".env")
        get_settings.cache_clear()

    uvicorn.run(
        "app:app", host=args.host, port=int(args.port), reload=bool(args.reload)
    )
