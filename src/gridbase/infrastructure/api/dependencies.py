"""FastAPI dependencies for the table API.

Identity is resolved upstream; the acting user id arrives in a request
header. Each request that works on one table gets its own freshly opened
``TableSession``.
"""

from typing import Annotated

from fastapi import Depends, Path, Request

from gridbase.core.config import get_settings
from gridbase.core.errors import exception_for
from gridbase.core.logging import get_logger
from gridbase.domain.record_store import RecordStore
from gridbase.domain.services import TableService, TableSession
from gridbase.infrastructure.persistence.database import get_db_manager
from gridbase.infrastructure.persistence.sql_record_store import SqlRecordStore

logger = get_logger(__name__)


def get_record_store() -> RecordStore:
    """Record store bound to the global database manager."""
    return SqlRecordStore(get_db_manager())


def get_current_user_id(request: Request) -> str:
    """Acting user id from the identity header, or the configured default."""
    settings = get_settings()
    return request.headers.get(settings.user_id_header) or settings.default_user_id


Store = Annotated[RecordStore, Depends(get_record_store)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]


def get_table_service(store: Store) -> TableService:
    return TableService(store)


async def get_table_session(
    store: Store,
    user_id: CurrentUserId,
    table_id: Annotated[str, Path(description="Table ID")],
) -> TableSession:
    """Open a session on the table named in the path.

    Raises:
        NotFoundError: If the table does not exist.
        StoreError: If loading the table fails.
    """
    session = TableSession(store, user_id=user_id)
    result = await session.open(table_id)
    if not result.ok:
        raise exception_for(result.error)
    return session


Tables = Annotated[TableService, Depends(get_table_service)]
OpenSession = Annotated[TableSession, Depends(get_table_session)]
