"""
Pydantic schemas for login and the resolved caller.
"""
from pydantic import BaseModel


# Resolved from a session; role stays a plain string so the access gate can
# reject roles it does not recognize with 403 instead of failing validation
class CurrentUser(BaseModel):
    """Authenticated caller as seen by the services."""
    username: str
    role: str


# Login request
class UserLogin(BaseModel):
    """Schema for login request."""
    username: str
    password: str


# Login response
class UserLoginResponse(BaseModel):
    """Schema for login response."""
    user: CurrentUser
    token: str
    message: str = "Login successful"
