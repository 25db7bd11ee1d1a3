"""Commit helper that turns database-level conflicts into domain errors."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from app.core.errors import ConcurrencyConflictError, ConflictError


async def commit_or_conflict(db: AsyncSession, duplicate_message: str = "Record already exists") -> None:
    try:
        await db.commit()
    except StaleDataError as e:
        # Version counter moved under us: another request won the race
        await db.rollback()
        raise ConcurrencyConflictError() from e
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError(duplicate_message) from e
