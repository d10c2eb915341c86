from typing import Annotated, Optional
import logging

from fastapi import Depends, HTTPException, status, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.core.security import verify_session_token
from app.models.worker import Worker, WorkerRole


logger = logging.getLogger(__name__)

# HTTP Bearer security scheme; the session cookie is the fallback
security = HTTPBearer(auto_error=False)


def _session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials],
) -> Optional[str]:
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_optional_worker(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> Optional[Worker]:
    """
    Resolve the signed-in worker, or None for anonymous callers.

    A missing token means anonymous. A token that is present but invalid,
    or names an unknown or deactivated worker, is rejected with 401.
    """
    token = _session_token(request, credentials)
    if not token:
        return None

    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = verify_session_token(token)
    if payload is None:
        logger.warning("Token verification failed - invalid or expired token")
        raise credentials_exception

    try:
        worker_id = int(payload["sub"])
    except ValueError:
        logger.warning(f"Invalid worker id in token: {payload['sub']}")
        raise credentials_exception

    worker = await db.get(Worker, worker_id)
    if worker is None:
        logger.warning(f"Worker {worker_id} from token not found")
        raise credentials_exception

    if not worker.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Worker account is deactivated"
        )

    return worker


async def get_current_worker(
    worker: Annotated[Optional[Worker], Depends(get_optional_worker)],
) -> Worker:
    """Dependency requiring a signed-in worker."""
    if worker is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return worker


def require_roles(*roles: WorkerRole):
    """
    Dependency factory restricting an endpoint to the given roles.

    Usage:
        @router.get("/", dependencies=[Depends(require_roles(WorkerRole.ADMIN))])
        async def admin_endpoint():
            ...
    """
    allowed = {role.value for role in roles}

    async def role_dependency(
        worker: Annotated[Worker, Depends(get_current_worker)],
    ) -> Worker:
        if worker.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient role. Required: {', '.join(sorted(allowed))}"
            )
        return worker

    return role_dependency


# Type aliases for cleaner endpoint signatures
DB = Annotated[AsyncSession, Depends(get_db)]
OptionalWorker = Annotated[Optional[Worker], Depends(get_optional_worker)]
CurrentWorker = Annotated[Worker, Depends(get_current_worker)]
AdminWorker = Annotated[Worker, Depends(require_roles(WorkerRole.ADMIN))]
