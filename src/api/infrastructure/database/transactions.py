"""Transaction helper for application services."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.exceptions import PersistenceError


@asynccontextmanager
async def persistence_transaction(
    session: AsyncSession,
    aggregate_type: str | None = None,
) -> AsyncIterator[None]:
    """Run the block in a transaction, surfacing commit failures as PersistenceError.

    Non-database errors raised inside the block propagate unchanged after
    rollback. Database errors, from the block or from the commit, are
    wrapped. A transaction the session already autobegan (e.g. by a read
    earlier in the request) is adopted and committed here.

    Args:
        session: Session to open the transaction on
        aggregate_type: Kind of aggregate being persisted, for the error

    Raises:
        PersistenceError: If the transaction cannot be committed
    """
    try:
        if session.in_transaction():
            try:
                yield
            except BaseException:
                await session.rollback()
                raise
            await session.commit()
        else:
            async with session.begin():
                yield
    except SQLAlchemyError as e:
        raise PersistenceError(
            f"Failed to commit {aggregate_type or 'transaction'}",
            aggregate_type=aggregate_type,
        ) from e
