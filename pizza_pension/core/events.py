from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

from fastapi import FastAPI
from loguru import logger

from pizza_pension.core import config
from pizza_pension.core.db import session as db_session


async def prepare_database() -> None:
    """
    Make sure the tables exist before the first request is served.
    """
    if not config.CREATE_TABLES_ON_STARTUP:
        logger.debug("Skipping table creation, CREATE_TABLES_ON_STARTUP is off")
        return
    await db_session.init_models()
    logger.info("Database tables are ready")


def create_start_app_handler(app: FastAPI) -> Callable:
    async def start_app() -> None:
        await prepare_database()

    return start_app


def create_stop_app_handler(app: FastAPI) -> Callable:
    async def stop_app() -> None:
        await db_session.engine.dispose()
        logger.info("Database engine disposed")

    return stop_app


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    await create_start_app_handler(app)()
    yield
    await create_stop_app_handler(app)()
