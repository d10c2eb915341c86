from datetime import datetime, timezone
from typing import Optional, Tuple
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.worker import Worker
from app.core.security import (
    verify_and_check_needs_rehash,
    get_password_hash,
    create_session_token,
    session_lifetime,
)


logger = logging.getLogger(__name__)


class AuthService:
    """Authentication service for worker login and session tokens."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def authenticate(self, username: str, password: str) -> Optional[Worker]:
        """
        Authenticate a worker by username and password.

        Only active workers can sign in. Hashes made with a deprecated
        scheme are upgraded transparently on a successful login.

        Args:
            username: Worker's username
            password: Plain text password

        Returns:
            Worker if authentication succeeded, None otherwise
        """
        stmt = select(Worker).where(Worker.username == username, Worker.is_active.is_(True))
        result = await self.db.execute(stmt)
        worker = result.scalar_one_or_none()

        if worker is None:
            logger.warning(f"Login rejected for unknown or inactive worker '{username}'")
            return None

        is_valid, needs_rehash = verify_and_check_needs_rehash(password, worker.password_hash)
        if not is_valid:
            logger.warning(f"Login rejected for worker '{username}': bad password")
            return None

        if needs_rehash:
            worker.password_hash = get_password_hash(password)

        worker.last_login = datetime.now(timezone.utc)
        await self.db.commit()
        await self.db.refresh(worker)

        logger.info(f"Worker {worker.username} logged in")
        return worker

    def create_session(self, worker: Worker, remember_me: bool = False) -> Tuple[str, int]:
        """
        Issue a session token carrying the worker's identity and role.

        Returns:
            Tuple of (token, expires_in_seconds)
        """
        lifetime = session_lifetime(remember_me)
        claims = {
            "username": worker.username,
            "role": worker.role,
        }
        if worker.department:
            claims["department"] = worker.department

        token = create_session_token(
            subject=worker.id,
            expires_delta=lifetime,
            additional_claims=claims,
        )
        return token, int(lifetime.total_seconds())
