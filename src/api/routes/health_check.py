from fastapi import APIRouter, Depends, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.error import ServerError
from src.app.result import Error
from src.app.use_cases.password_reset.errors import STORE_FAILURE
from src.depends import get_session

router = APIRouter(tags=["Health"])


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check(session: AsyncSession = Depends(get_session)):
    """Liveness plus a round trip to the token store"""
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        raise ServerError(
            Error(STORE_FAILURE, "Database is unreachable"),
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    return {"status": "ok"}
