from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker
from app.core.config import settings  # where DATABASE_URL lives

engine = create_async_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
SessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()

async def get_db() -> AsyncSession:
    """
    Dependency that provides a database session.
    Session is automatically closed after the request.

    Returns:
        AsyncSession: SQLAlchemy async session

    Usage:
        @app.get("/items/")
        async def read_items(db: AsyncSession = Depends(get_db)):
            result = await db.execute(select(Item))
            return result.scalars().all()
    """
    async with SessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def transaction(db: AsyncSession):
    """
    Run several writes as one unit: commit when the block exits cleanly,
    roll every statement back if any of them fails.

    Usage:
        async with transaction(db):
            await db.execute(insert(...))
            await db.execute(delete(...))
    """
    try:
        yield db
        await db.commit()
    except Exception:
        await db.rollback()
        raise
