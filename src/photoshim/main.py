"""Runtime entry point: settings, logging and the async driver."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import cv2

from photoshim.config import Settings, get_settings
from photoshim.core.status import handle_checks_enabled, set_handle_checks
from photoshim.dispatch.driver import PhotoDriver

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(settings: Settings | None = None) -> AsyncIterator[PhotoDriver]:
    """Configure logging, start a driver, and shut it down on exit."""
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    logger.info(
        "Starting PhotoShim (opencv=%s, max_concurrent=%s, check_handles=%s)",
        cv2.__version__,
        settings.max_concurrent,
        settings.check_handles,
    )

    previous_checks = handle_checks_enabled()
    set_handle_checks(settings.check_handles)
    driver = PhotoDriver(settings)
    try:
        yield driver
    finally:
        logger.info("Shutting down PhotoShim")
        driver.shutdown()
        set_handle_checks(previous_checks)
