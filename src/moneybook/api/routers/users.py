"""User registration, login and identity endpoints.

Endpoints
---------
POST /users          Register a user. Body: {login, password}.
POST /users/login    Exchange credentials for a bearer token.
GET  /users/me       The authenticated user.
"""

from fastapi import APIRouter, Depends

from moneybook.api.deps import get_current_user, get_user_service
from moneybook.api.schemas import Credentials, TokenOut, UserOut
from moneybook.domain.entities import User
from moneybook.domain.user import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut, status_code=201)
def register(body: Credentials, users: UserService = Depends(get_user_service)) -> UserOut:
    user = users.register(body.login, body.password)
    return UserOut.from_entity(user)


@router.post("/login", response_model=TokenOut)
def login(body: Credentials, users: UserService = Depends(get_user_service)) -> TokenOut:
    issued = users.login(body.login, body.password)
    return TokenOut(
        token=issued.token,
        expires_at=issued.expires_at,
        user=UserOut.from_entity(issued.user),
    )


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)) -> UserOut:
    return UserOut.from_entity(user)
