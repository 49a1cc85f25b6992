#!/usr/bin/env python
"""
Script to create database tables for the consultation backend
"""

# Standard library imports
import asyncio
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Third-party imports
from sqlalchemy import inspect

# Local application imports
from consulta.core.db import Database
from consulta.settings import settings


async def create_tables():
    """Create all tables in the database"""
    print("Creating database tables...")

    database = Database(settings.SQLALCHEMY_ASYNC_DATABASE_URI, echo=settings.DATABASE_ECHO)
    try:
        await database.create_all()
        print("✅ All tables created successfully!")

        # Verify tables were created
        async with database.engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

        print("\nCreated tables:")
        for table in sorted(tables):
            print(f"  - {table}")

    except Exception as e:
        print(f"❌ Error creating tables: {e}")
        sys.exit(1)
    finally:
        await database.dispose()


if __name__ == "__main__":
    asyncio.run(create_tables())
