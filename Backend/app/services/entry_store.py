"""
Generic id-keyed reads and writes shared by every resource.

Writes only flush, they never commit: the caller decides the transaction
boundary (see app.services.database.transaction).
"""
import logging
from typing import Any, Dict, List, Optional, Sequence, Union

from sqlalchemy import delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

logger = logging.getLogger(__name__)

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def insert_for(db: AsyncSession):
    """
    Return the dialect-specific `insert` construct for the session's engine.

    Both PostgreSQL and SQLite inserts expose `on_conflict_do_update` and
    `on_conflict_do_nothing`, which is what the upserts in this package rely on.
    """
    dialect_name = db.get_bind().dialect.name
    try:
        return _DIALECT_INSERTS[dialect_name]
    except KeyError:
        raise RuntimeError(f"Upserts are not supported on dialect '{dialect_name}'")


async def find_all_entries(model, db: AsyncSession) -> List[Any]:
    result = await db.execute(select(model).order_by(model.id))
    return list(result.scalars().all())


async def find_entry_with_id(model, entry_id: int, db: AsyncSession) -> Optional[Any]:
    """Fetch a single row by primary key, or None."""
    result = await db.execute(select(model).where(model.id == entry_id))
    return result.scalar_one_or_none()


async def find_entries_with_ids(model, ids: Sequence[int], db: AsyncSession) -> List[Any]:
    if not ids:
        return []
    result = await db.execute(select(model).where(model.id.in_(set(ids))))
    return list(result.scalars().all())


async def create_new_entry(
    model,
    values: Union[Dict[str, Any], List[Dict[str, Any]]],
    db: AsyncSession
):
    """
    Insert one row (dict) or several rows (list of dicts).

    Returns the inserted instance(s) with their generated ids populated.
    """
    if isinstance(values, list):
        entries = [model(**row) for row in values]
        db.add_all(entries)
        await db.flush()  # Use flush to get the ids before the transaction commits.
        logger.debug(f"Inserted {len(entries)} rows into {model.__tablename__}")
        return entries

    entry = model(**values)
    db.add(entry)
    await db.flush()
    await db.refresh(entry)
    logger.debug(f"Inserted row {entry.id} into {model.__tablename__}")
    return entry


async def update_entry_with_id(
    model,
    entry_id: int,
    patch: Dict[str, Any],
    db: AsyncSession
) -> Optional[Any]:
    entry = await find_entry_with_id(model, entry_id, db)
    if entry is None:
        return None

    for key, value in patch.items():
        setattr(entry, key, value)
    await db.flush()
    logger.debug(f"Updated row {entry_id} of {model.__tablename__} with {patch}")
    return entry


async def delete_entry_with_id(model, entry_id: int, db: AsyncSession) -> int:
    """Delete a row by id. Returns the number of deleted rows (0 or 1)."""
    result = await db.execute(delete(model).where(model.id == entry_id))
    logger.debug(f"Deleted {result.rowcount} rows with id {entry_id} from {model.__tablename__}")
    return result.rowcount
