"""
Authentication Endpoints.

Registration and password login. No session or token is issued; clients
send the returned ``uid`` in the ``X-User-Id`` header afterwards.
"""

from fastapi import APIRouter, status

from compliance_ai.core.models.io.users import UserLogin, UserRead, UserRegister
from compliance_ai.server.services.deps import UserServiceDep

router = APIRouter()


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register User",
    description="Create a user account. The password is stored as a salted hash.",
    response_description="The created user without the password hash.",
    responses={409: {"description": "E-mail already registered"}},
)
async def register(data: UserRegister, users: UserServiceDep) -> UserRead:
    user = await users.register(data)
    return UserRead.model_validate(user)


@router.post(
    "/login",
    response_model=UserRead,
    summary="Login",
    description="Verify e-mail and password.",
    response_description="The authenticated user without the password hash.",
    responses={401: {"description": "Invalid credentials"}},
)
async def login(data: UserLogin, users: UserServiceDep) -> UserRead:
    user = await users.authenticate(data.email, data.password)
    return UserRead.model_validate(user)
