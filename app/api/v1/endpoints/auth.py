from fastapi import APIRouter, HTTPException, status, Response

from app.api.deps import DB, CurrentWorker
from app.config import settings
from app.schemas.auth import LoginRequest, SessionResponse
from app.schemas.worker import WorkerResponse
from app.services.auth_service import AuthService
from app.services.activity_service import ActivityService, actor_id

router = APIRouter(tags=["Authentication"])


@router.post("/login", response_model=SessionResponse)
async def login(
    data: LoginRequest,
    response: Response,
    db: DB,
):
    """
    Authenticate a worker and open a session.

    The token is returned in the body and also set as an HttpOnly cookie.
    """
    auth_service = AuthService(db)

    worker = await auth_service.authenticate(data.username, data.password)

    if not worker:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token, expires_in = auth_service.create_session(worker, data.remember_me)

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=expires_in,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )

    await ActivityService(db).try_record(
        "Login", f"{worker.username} logged in", None, actor_id(worker)
    )

    return SessionResponse(
        access_token=token,
        token_type="bearer",
        expires_in=expires_in,
        worker=WorkerResponse.model_validate(worker),
    )


@router.post("/logout")
async def logout(
    response: Response,
    current_worker: CurrentWorker,
    db: DB,
):
    """End the session by clearing the cookie."""
    response.delete_cookie(settings.SESSION_COOKIE_NAME)

    await ActivityService(db).try_record(
        "Logout", f"{current_worker.username} logged out", None, actor_id(current_worker)
    )

    return {"message": "Successfully logged out"}


@router.get("/me", response_model=WorkerResponse)
async def get_current_worker_info(
    current_worker: CurrentWorker,
):
    """Get the signed-in worker."""
    return current_worker
