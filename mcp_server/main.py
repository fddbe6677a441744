import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .config import LOG_LEVEL, MCP_HOST, MCP_PORT, missing_credentials
from .handlers import routers
from .services import Services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    missing = missing_credentials()
    if missing:
        logger.warning("Missing %s; tool calls will fail until they are set", ", ".join(missing))
    app.state.services = Services.create()
    try:
        yield
    finally:
        await app.state.services.aclose()


def create_app(services: Services | None = None) -> FastAPI:
    """Build the application. Passing ``services`` skips the start-up wiring."""
    if services is None:
        app = FastAPI(title="Harvest MCP Server", lifespan=lifespan)
    else:
        app = FastAPI(title="Harvest MCP Server")
        app.state.services = services
    for router in routers:
        app.include_router(router)
    return app


app = create_app()


def run():
    import uvicorn

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host=MCP_HOST, port=MCP_PORT)


if __name__ == "__main__":
    run()
