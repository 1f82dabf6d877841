from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db
from postboard.models import User
from postboard.security import resolve_identity

# auto_error=False: a missing or non-Bearer Authorization header means an
# anonymous caller, not a failed request.  Operations that need an identity
# raise Unauthenticated themselves.
bearer_scheme = HTTPBearer(auto_error=False)


async def get_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """
    Reusable FastAPI dependency resolving the caller's identity.

    Usage in a router::

        @router.post("/posts")
        async def create_post(identity: User | None = Depends(get_identity)):
            ...

    Shares the request's session with the handler (FastAPI caches
    ``get_db`` per request), so the returned User belongs to the same
    unit of work as the operation.
    """
    token = credentials.credentials if credentials else None
    return await resolve_identity(db, token)
