import logging

from fastapi import FastAPI

from app.api.errors import register_exception_handlers
from app.api.user import router as user_router
from app.connections import mongo_lifespan
from app.utils.config.env import Settings


logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(settings: Settings | None = None, lifespan=mongo_lifespan) -> FastAPI:
    settings = settings or Settings()
    # Starlette's debug mode is left off; it would bypass the error envelope.
    app = FastAPI(title=settings.app_name, version="0.1.0", lifespan=lifespan)
    app.state.settings = settings

    register_exception_handlers(app)
    app.include_router(user_router, prefix=settings.api_prefix)
    logger.info("Created %s app for %s environment", settings.app_name, settings.environment)
    return app


_settings = Settings()
configure_logging(_settings)
app = create_app(_settings)
