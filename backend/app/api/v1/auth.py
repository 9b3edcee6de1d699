"""
Authentication API endpoints.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, Cookie, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings
from app.schemas.user import CurrentUser, UserLogin, UserLoginResponse
from app.services import authenticate_user, get_session_store, SessionStore

router = APIRouter(prefix="/auth", tags=["authentication"])

# Unprefixed login path used by older clients
legacy_router = APIRouter(tags=["authentication"])

bearer_scheme = HTTPBearer(auto_error=False)


def _set_session_cookie(response: Response, session_id: str) -> None:
    # HttpOnly, Secure outside debug, SameSite
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session_id,
        httponly=True,
        secure=not settings.DEBUG,
        samesite="lax",
        max_age=settings.SESSION_EXPIRY_SECONDS
    )


def get_session_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session_cookie: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
) -> Optional[str]:
    """
    Extract the session id from the request.

    A bearer token takes precedence over the session cookie.
    """
    if credentials is not None:
        return credentials.credentials
    return session_cookie


async def get_optional_user(
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionStore = Depends(get_session_store),
) -> Optional[CurrentUser]:
    """
    Resolve the caller from its session.

    Returns None when the request carries no credential or the session is
    unknown or expired; the access gate turns that into a 401.
    """
    if not session_id:
        return None

    session_data = sessions.get_session(session_id)
    if not session_data:
        return None

    return CurrentUser(username=session_data["username"], role=session_data.get("role", ""))


async def get_current_user(
    user: Optional[CurrentUser] = Depends(get_optional_user),
) -> CurrentUser:
    """
    Dependency requiring an authenticated caller.
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


@router.post("/login", response_model=UserLoginResponse, status_code=status.HTTP_200_OK)
async def login(
    credentials: UserLogin,
    response: Response,
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Authenticate user and create session.

    - **username**: Demo account name
    - **password**: Account password

    Returns the user and session token, and sets the session cookie.
    """
    user = authenticate_user(credentials.username, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password"
        )

    session_id = sessions.create_session(user.username, {"role": user.role.value})
    _set_session_cookie(response, session_id)

    return UserLoginResponse(
        user=CurrentUser(username=user.username, role=user.role.value),
        token=session_id,
        message="Login successful"
    )


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(
    response: Response,
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Logout user and destroy session.

    Clears session cookie and removes session from Redis.
    """
    if session_id:
        sessions.delete_session(session_id)

    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        httponly=True,
        secure=not settings.DEBUG,
        samesite="lax"
    )

    return {"message": "Logout successful"}


@router.get("/me", response_model=CurrentUser)
async def read_current_user(user: CurrentUser = Depends(get_current_user)):
    """
    Get currently authenticated user.
    """
    return user


@router.post("/refresh", status_code=status.HTTP_200_OK)
async def refresh_session(
    response: Response,
    session_id: Optional[str] = Depends(get_session_id),
    sessions: SessionStore = Depends(get_session_store),
):
    """
    Refresh session expiry.

    Extends session expiry time by the configured duration.
    """
    if not session_id or not sessions.extend_session(session_id):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired or invalid"
        )

    _set_session_cookie(response, session_id)

    return {"message": "Session refreshed"}


legacy_router.add_api_route(
    "/login",
    login,
    methods=["POST"],
    response_model=UserLoginResponse,
    include_in_schema=False,
)
