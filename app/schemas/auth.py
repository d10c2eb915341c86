from pydantic import BaseModel, Field

from app.schemas.worker import WorkerResponse


class LoginRequest(BaseModel):
    """Login request schema."""
    username: str = Field(..., min_length=1, description="Worker username")
    password: str = Field(..., min_length=1, description="Worker password")
    remember_me: bool = Field(False, description="Keep the session for 30 days instead of 1")


class SessionResponse(BaseModel):
    """Session token response schema."""
    access_token: str = Field(..., description="Signed session token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Session lifetime in seconds")
    worker: WorkerResponse
