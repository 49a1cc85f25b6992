# Standard library imports
from collections.abc import Awaitable, Callable
from typing import Any

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from consulta.core.db.database import Database


async def run_with_new_session(
    database: Database,
    func: Callable[..., Awaitable[Any]],
    *args: Any,
    **kwargs: Any,
) -> Any:
    """
    Run any function with a fresh new DB session.

    Args:
        database: The database client to open the session on.
        func: The function to run, which must accept an
        AsyncSession as its first argument.
        *args: Positional arguments to pass to the function.
        **kwargs: Keyword arguments to pass to the function.

    Returns:
        Any: The result of the function execution.
    """
    session: AsyncSession
    async with database.session() as session:
        return await func(session, *args, **kwargs)
