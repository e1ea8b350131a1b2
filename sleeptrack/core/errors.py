"""Turn database failures into the single message shown to the user."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sleeptrack.observability import get_metrics_backend

logger = logging.getLogger(__name__)


@asynccontextmanager
async def backend_call(message: str, db: AsyncSession | None = None) -> AsyncIterator[None]:
    """Run a block of database work, mapping any failure to ``message``.

    The session is rolled back when given. The underlying error is logged,
    the client only sees ``message``.
    """
    try:
        yield
    except SQLAlchemyError:
        logger.exception(message)
        get_metrics_backend().observe_backend_error(message)
        if db is not None:
            await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=message,
        )
