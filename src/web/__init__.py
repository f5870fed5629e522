import asyncio

from quart import Quart

from src.config import get_settings
from src.container import get_chat_interactor
from src.infrastructure.logging import configure_logging, get_logger
from src.web.routes import register_routes
from src.web.sse import broadcast_event, connected_queues, shutdown_event

logger = get_logger(__name__)


def create_app() -> Quart:
    # Configure structured logging
    configure_logging(get_settings().LOG_LEVEL)

    app = Quart(__name__)

    # Register routes
    register_routes(app)

    @app.before_serving
    async def startup():
        logger.info("application_startup")

        # Reset shutdown event
        shutdown_event.clear()

        interactor = get_chat_interactor()
        await interactor.subscribe_to_events(broadcast_event)

    @app.after_serving
    async def shutdown():
        logger.info("application_shutdown")
        shutdown_event.set()

        # Allow SSE generators to exit gracefully
        await asyncio.sleep(0.1)

        connected_queues.clear()

    return app
