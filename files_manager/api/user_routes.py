"""
===============================================================================
TARJETA CRC - files_manager/api/user_routes.py (Usuarios)
===============================================================================

Responsabilidades:
  - POST /users: alta de usuario (encola bienvenida en userQueue).
  - GET /users/me: usuario autenticado ({id, email}, nunca el digest).

Colaboradores:
  - application.usecases.CreateUserUseCase / GetCurrentUserUseCase
  - api.dependencies.current_user_id
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..application.usecases import (
    CreateUserInput,
    CreateUserUseCase,
    GetCurrentUserUseCase,
)
from ..container import get_create_user_use_case, get_current_user_use_case
from ..crosscutting.error_responses import OPENAPI_ERROR_RESPONSES
from .dependencies import current_user_id

router = APIRouter(prefix="/users", tags=["users"], responses=OPENAPI_ERROR_RESPONSES)


class CreateUserRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserResponse(BaseModel):
    id: str
    email: str


@router.post("", status_code=201, response_model=UserResponse)
def create_user(
    payload: CreateUserRequest | None = None,
    use_case: CreateUserUseCase = Depends(get_create_user_use_case),
) -> UserResponse:
    body = payload or CreateUserRequest()
    user = use_case.execute(CreateUserInput(email=body.email, password=body.password))
    return UserResponse(**user.to_public_dict())


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: str = Depends(current_user_id),
    use_case: GetCurrentUserUseCase = Depends(get_current_user_use_case),
) -> UserResponse:
    return UserResponse(**use_case.execute(user_id).to_public_dict())
