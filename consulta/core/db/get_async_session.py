# Standard library imports
from collections.abc import AsyncGenerator

# Third-party imports
from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.core.db.database import Database


def get_database(request: Request) -> Database:
    return request.app.state.database


# Dependency to get an async session bound to the application's database client
async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    database = get_database(request)
    async with database.session() as session:
        yield session
