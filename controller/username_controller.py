# controller/username_controller.py
from fastapi import APIRouter, Depends, Query, status
from config.settings import settings
from model.account import AccountID
from model.api import (
    ErrorResponse,
    UsernameCheckResponse,
    UsernameSetRequest,
    UsernameSetResponse,
)
from service.username_service import UsernameService
from util.constants import InternalURIs
from util.functions import with_deadline
from controller.controller_dependencies import (
    current_account_id,
    get_username_service,
    rate_limit,
)

username_router = APIRouter(
    dependencies=[Depends(rate_limit)],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
        status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
    },
)


@username_router.get(
    InternalURIs.USERNAME_CHECK,
    response_model=UsernameCheckResponse,
    status_code=status.HTTP_200_OK,
)
async def check_username(
    username: str = Query(..., min_length=1),
    service: UsernameService = Depends(get_username_service),
) -> UsernameCheckResponse:
    available = await with_deadline(
        service.check_availability(username), settings.REQUEST_TIMEOUT_SECONDS
    )
    return UsernameCheckResponse(available=available)


@username_router.post(
    InternalURIs.USERNAME,
    response_model=UsernameSetResponse,
    status_code=status.HTTP_200_OK,
)
async def set_username(
    payload: UsernameSetRequest,
    account_id: AccountID = Depends(current_account_id),
    service: UsernameService = Depends(get_username_service),
) -> UsernameSetResponse:
    account = await with_deadline(
        service.set_username(account_id, payload.username),
        settings.REQUEST_TIMEOUT_SECONDS,
    )
    return UsernameSetResponse(account=account)
