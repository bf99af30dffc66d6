"""
===============================================================================
TARJETA CRC - files_manager/api/auth_routes.py (Sign-in / Sign-out)
===============================================================================

Responsabilidades:
  - GET /connect: Basic auth -> token de sesión opaco.
  - GET /disconnect: revoca el token actual (204, sin body).

Colaboradores:
  - identity.auth_users.AuthService
  - api.dependencies.current_user_id
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Request, Response
from pydantic import BaseModel

from ..container import get_auth_service
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from ..identity.auth_users import AuthService
from .dependencies import current_user_id

router = APIRouter(tags=["auth"], responses=OPENAPI_ERROR_RESPONSES)


class TokenResponse(BaseModel):
    token: str


@router.get("/connect", response_model=TokenResponse)
def connect(
    authorization: str | None = Header(None, alias="Authorization"),
    auth: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    return TokenResponse(token=auth.sign_in_basic(authorization))


@router.get("/disconnect", status_code=204)
def disconnect(
    request: Request,
    user_id: str = Depends(current_user_id),
    auth: AuthService = Depends(get_auth_service),
) -> Response:
    auth.revoke(request.state.session_token, user_id)
    return Response(status_code=204)
