"""Data export endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from sleeptrack.core.database import get_db
from sleeptrack.core.errors import backend_call
from sleeptrack.core.hybrid_auth import get_current_user
from sleeptrack.models.user import User
from sleeptrack.services.export import EXPORT_FILENAME, export_user_data

router = APIRouter()


@router.get("")
async def export_data(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> JSONResponse:
    """Download the user's logs, goal and journal as a JSON file."""
    async with backend_call("Failed to export data."):
        data = await export_user_data(db, current_user.id)

    return JSONResponse(
        content=data,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
