import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import certifi
from fastapi import FastAPI
from mongoengine import connect, disconnect

from app.utils.config.env import Settings


logger = logging.getLogger(__name__)


def init_mongo(settings: Settings, **kwargs) -> None:
    options = {"tz_aware": True}
    if settings.mongo_srv:
        options["tlsCAFile"] = certifi.where()
    options.update(kwargs)
    connect(host=settings.mongo_uri, alias="default", **options)
    logger.info("Connected to MongoDB database %s", settings.mongo_db)


def close_mongo() -> None:
    disconnect(alias="default")


@asynccontextmanager
async def mongo_lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_mongo(app.state.settings)
    try:
        yield
    finally:
        close_mongo()
