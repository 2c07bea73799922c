"""Initialize the database schema for the catalog site.

Creates all tables needed by the API. Run this before starting the API
server; waits for the database to accept connections first.
"""

import asyncio
import sys

from sqlalchemy import text
from tenacity import retry, stop_after_attempt, wait_exponential

from marble.config import settings
from marble.db import engine, reset_tables
from marble.models import Base


@retry(stop=stop_after_attempt(5), wait=wait_exponential(multiplier=1, min=1, max=10), reraise=True)
async def wait_for_database():
    """Open a connection, retrying while the database container starts."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_database():
    """Create all database tables."""
    print(f"Initializing database: {settings.db.url.split('@')[-1]}")

    await wait_for_database()
    print("✓ Database reachable")

    # Drop and recreate (clean start)
    await reset_tables()
    print("✓ Dropped and created all tables")

    print("\n✅ Database initialization complete!")
    print(f"Tables created: {', '.join(Base.metadata.tables.keys())}")


async def main():
    """Main entry point."""
    try:
        await init_database()
    except Exception as e:
        print(f"\n❌ Error initializing database: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
