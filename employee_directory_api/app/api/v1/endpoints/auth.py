"""
Account endpoints for API v1.

``/signup`` registers an account and ``/login`` exchanges an email and
password for a signed bearer token.  Both are public.  Errors raised by
``AccountService`` are turned into HTTP responses by the handler
registered in ``main.create_app``.
"""

from fastapi import APIRouter, Depends, status

from employee_directory_api.app.api.deps import get_account_service
from employee_directory_api.app.schemas.account import LoginRequest, SignupRequest, TokenResponse
from employee_directory_api.app.schemas.common import MessageResponse
from employee_directory_api.app.services.account_service import AccountService

router = APIRouter()


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    service: AccountService = Depends(get_account_service),
) -> MessageResponse:
    """Register a new account.

    Returns 400 on invalid input and 409 when the email is taken.
    """
    message = await service.register(payload.username, payload.email, payload.password)
    return MessageResponse(message=message)


@router.post("/login", response_model=TokenResponse)
async def login(
    payload: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> TokenResponse:
    """Authenticate and return a token valid for one hour.

    Returns 404 for an unknown email and 401 for a wrong password.
    """
    token = await service.authenticate(payload.email, payload.password)
    return TokenResponse(token=token)
