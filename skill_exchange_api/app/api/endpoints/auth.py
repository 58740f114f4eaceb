"""
Authentication endpoints: signup, login and logout.
"""

from fastapi import APIRouter, HTTPException, status

from skill_exchange_api.app.core.security import create_access_token
from skill_exchange_api.app.schemas.user import TokenResponse, UserCreate, UserLogin, UserRead
from skill_exchange_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def signup(user: UserCreate) -> UserRead:
    """Register a new user.

    Returns 400 if the username or e‑mail is already registered.  The
    response never includes the password.
    """
    try:
        return await UserService.create_user(user)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/login", response_model=TokenResponse)
async def login(credentials: UserLogin) -> TokenResponse:
    """Check credentials and return the user with a bearer token."""
    user = await UserService.authenticate(credentials.username, credentials.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = create_access_token({"sub": user.id})
    return TokenResponse(user=user, access_token=token)


@router.post("/logout")
async def logout() -> dict:
    """Tokens are stateless; the client simply discards its token."""
    return {"detail": "Logged out successfully"}
