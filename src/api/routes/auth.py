from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, ConfigDict, Field

from src.api.error import ClientError, ServerError
from src.app.result import Error
from src.app.services.notifier import IPasswordResetNotifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password_reset import (
    ConfirmPasswordResetUseCase,
    MessageResponse,
    PasswordResetSettings,
    RequestPasswordResetUseCase,
)
from src.app.use_cases.password_reset.errors import CLIENT_ERROR_CODES, INVALID_REQUEST
from src.depends import get_notifier, get_password_reset_settings, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


class ForgotPasswordRequest(BaseModel):
    """
    Forgot password HTTP request payload

    The email is deliberately not validated here: malformed and unknown
    addresses must get the same answer as real ones.
    """

    email: Optional[str] = Field(None, description="Account email address")


@router.post("/forgot-password", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def forgot_password(
    http_request: Request,
    request: Optional[ForgotPasswordRequest] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: IPasswordResetNotifier = Depends(get_notifier),
    settings: PasswordResetSettings = Depends(get_password_reset_settings),
):
    """
    Request Password Reset

    Issues a reset token and sends the reset link out of band.

    Security:
        - No email enumeration (same response for valid/invalid/blank emails)
        - Delivery failures never change the response

    Returns:
        - 200 OK: Always, with a generic message
        - 500 Internal Server Error: Store failure
    """
    use_case = RequestPasswordResetUseCase(uow, notifier, settings)
    result = await use_case.execute(
        request.email if request else None,
        request_ip=http_request.client.host if http_request.client else None,
        user_agent=http_request.headers.get("user-agent"),
    )

    if result.is_err():
        raise ServerError(result.error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload

    Accepts both newPassword and new_password.
    """

    model_config = ConfigDict(populate_by_name=True)

    token: Optional[str] = Field(None, description="Raw reset token from the reset link")
    new_password: Optional[str] = Field(None, alias="newPassword", description="New password")


@router.post("/reset-password", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def reset_password(
    request: Optional[ResetPasswordRequest] = None,
    uow: UnitOfWork = Depends(get_unit_of_work),
    settings: PasswordResetSettings = Depends(get_password_reset_settings),
):
    """
    Confirm Password Reset

    Consumes the reset token and sets the new password.

    Raises:
        - 400 Bad Request: Missing body, blank token, weak password, or
          invalid/expired/used token (one message for all three)
        - 500 Internal Server Error: Store failure
    """
    if request is None:
        raise ClientError(Error(INVALID_REQUEST, "Request body is required"))

    use_case = ConfirmPasswordResetUseCase(uow, settings)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in CLIENT_ERROR_CODES:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
