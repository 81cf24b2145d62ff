import functools

from sqlalchemy.exc import SQLAlchemyError

from src.app.services.unit_of_work import StoreError


def translate_store_errors(func):
    """Re-raise SQLAlchemy failures of an async adapter method as StoreError"""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as exc:
            raise StoreError(f"{func.__qualname__} failed: {exc.__class__.__name__}") from exc

    return wrapper
