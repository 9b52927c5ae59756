import asyncio
import os
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Children first, so foreign keys never block a drop
CATALOG_TABLES = [
    "playlists_tracks",
    "users_tracks",
    "users_artists",
    "tracks_rating",
    "artists_tracks",
    "tracks",
    "albums",
    "artists",
]

async def clear_database():
    """
    Connects to the database and drops the catalog tables.
    This is useful for clearing out old data during development.
    """
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        print("Error: DATABASE_URL environment variable not set.")
        return

    # A plain postgresql:// URL needs the asyncpg driver to be used here.
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://")

    print("Connecting to database...")
    engine = create_async_engine(database_url)

    async with engine.connect() as conn:
        print(f"Dropping catalog tables ({', '.join(CATALOG_TABLES)})...")
        for table in CATALOG_TABLES:
            await conn.execute(text(f"DROP TABLE IF EXISTS {table} CASCADE"))
        await conn.commit()
        print("Tables cleared successfully.")

    await engine.dispose()

if __name__ == "__main__":
    print("This script will permanently delete catalog data from your database.")
    confirm = input("Are you sure you want to continue? (y/n): ")
    if confirm.lower() == 'y':
        asyncio.run(clear_database())
    else:
        print("Operation cancelled.")
