"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from garagelog.api.dependencies import CurrentClaims, DbSession, apply_cookie, get_token
from garagelog.schemas.auth import AuthResponse, ClaimsResponse, Credentials, TokenResponse
from garagelog.schemas.user import UserResponse
from garagelog.services.auth import SessionAuthority, get_session_authority

router = APIRouter(prefix="/auth", tags=["auth"])

Authority = Annotated[SessionAuthority, Depends(get_session_authority)]


@router.post("", response_model=AuthResponse)
async def login(
    credentials: Credentials,
    response: Response,
    db: DbSession,
    authority: Authority,
):
    """Login with username and password; sets the session cookie."""
    user = authority.check_credentials(db, credentials.username, credentials.password)
    issued = authority.issue(user.id, user.username, user.is_admin)
    apply_cookie(response, issued.cookie)

    return AuthResponse(
        access_token=issued.token,
        expires_at=issued.claims.expires_at,
        user=UserResponse.model_validate(user),
    )


@router.get("/verify", response_model=ClaimsResponse)
async def verify(claims: CurrentClaims):
    """Return the claims of a valid token."""
    return ClaimsResponse(**claims.model_dump())


@router.get(
    "/refresh",
    response_model=TokenResponse,
    responses={status.HTTP_204_NO_CONTENT: {"description": "Token not yet due for refresh"}},
)
async def refresh(
    token: Annotated[str, Depends(get_token)],
    response: Response,
    authority: Authority,
    force: bool = False,
):
    """Re-issue the token when it is close to expiry, or always when forced."""
    issued = authority.refresh(token, force=force)
    if issued is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    apply_cookie(response, issued.cookie)
    return TokenResponse(access_token=issued.token, expires_at=issued.claims.expires_at)


@router.get("/logout")
async def logout(response: Response, authority: Authority):
    """Clear the session cookie. Bearer tokens stay valid until they expire."""
    apply_cookie(response, authority.revoke())
    return {"message": "Logged out successfully"}
