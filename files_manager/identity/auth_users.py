"""
===============================================================================
TARJETA CRC - identity/auth_users.py
===============================================================================

Módulo:
    Autenticación de Usuarios (tokens de sesión opacos)

Responsabilidades:
    - Calcular el digest one-way del password (SHA-1 hex, determinístico).
    - Parsear `Authorization: Basic <base64(email:password)>`.
    - Sign-in: (email, digest) -> usuario -> token con TTL fijo.
    - Resolver el usuario actual SOLO desde el token (nunca desde el body).
    - Sign-out: validar token y revocarlo.
    - Exponer dependencias FastAPI (require_user_id).

Colaboradores:
    - domain.services.SessionStore / UserRepository
    - crosscutting.exceptions.AuthorizationError
    - crosscutting.metrics (sesiones emitidas/revocadas, fallos de sign-in)
    - crosscutting.logger

Decisiones de diseño:
    - El digest es determinístico porque el lookup es por (email, digest).
    - No diferenciamos “usuario no existe” vs “password incorrecto”.
    - No loguear secretos ni tokens; solo info mínima y segura.
===============================================================================
"""

from __future__ import annotations

import base64
import binascii
import hashlib
from dataclasses import dataclass
from typing import Callable

from fastapi import Depends, Request

from ..crosscutting.exceptions import AuthorizationError
from ..crosscutting.logger import logger
from ..crosscutting.metrics import (
    record_session_issued,
    record_session_revoked,
    record_sign_in_failure,
)
from ..domain.services import SessionStore, UserRepository

# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------

BASIC_SCHEME: str = "basic"
DEFAULT_SESSION_HEADER: str = "X-Token"
DEFAULT_SESSION_COOKIE: str = "session_token"
SESSION_TTL_SECONDS: int = 24 * 3600


@dataclass(frozen=True, slots=True)
class BasicCredentials:
    email: str
    password: str


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    """Digest SHA-1 hex del password (formato persistido en `users.password`)."""
    return hashlib.sha1(password.encode("utf-8")).hexdigest()


# ---------------------------------------------------------------------------
# Extracción de credenciales (header/cookie)
# ---------------------------------------------------------------------------


def parse_basic_credentials(authorization: str | None) -> BasicCredentials:
    """Decodifica `Basic <base64(email:password)>`.

    El separador es el PRIMER ':' (el password puede contenerlo).
    Cualquier malformación -> AuthorizationError.
    """
    if not authorization:
        raise AuthorizationError()

    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != BASIC_SCHEME:
        raise AuthorizationError()

    try:
        decoded = base64.b64decode(parts[1].strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise AuthorizationError(original_error=exc) from exc

    email, sep, password = decoded.partition(":")
    if not sep or not email or not password:
        raise AuthorizationError()
    return BasicCredentials(email=email, password=password)


def extract_session_token(
    request: Request,
    header_name: str = DEFAULT_SESSION_HEADER,
    cookie_name: str = DEFAULT_SESSION_COOKIE,
) -> str | None:
    """Resuelve token desde el header de sesión o, si falta, desde cookie."""
    token = (request.headers.get(header_name) or "").strip()
    if token:
        return token
    cookie = (request.cookies.get(cookie_name) or "").strip()
    return cookie or None


# ---------------------------------------------------------------------------
# Auth Flow
# ---------------------------------------------------------------------------


class AuthService:
    """Sign-in / resolución / sign-out sobre SessionStore + UserRepository."""

    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionStore,
        ttl_seconds: int = SESSION_TTL_SECONDS,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._ttl_seconds = ttl_seconds

    def sign_in(self, email: str, password: str) -> str:
        user = self._users.find_by_credentials(email, hash_password(password))
        if user is None:
            record_sign_in_failure()
            logger.warning("Sign-in rechazado")
            raise AuthorizationError()

        token = self._sessions.issue(user.id, self._ttl_seconds)
        record_session_issued()
        logger.info("Sesión emitida", extra={"user_id": user.id})
        return token

    def sign_in_basic(self, authorization: str | None) -> str:
        credentials = parse_basic_credentials(authorization)
        return self.sign_in(credentials.email, credentials.password)

    def resolve_user_id(self, token: str | None) -> str:
        if not token:
            raise AuthorizationError()
        user_id = self._sessions.resolve(token)
        if not user_id:
            raise AuthorizationError()
        return user_id

    def sign_out(self, token: str | None) -> None:
        self.revoke(token, self.resolve_user_id(token))

    def revoke(self, token: str, user_id: str) -> None:
        """Revoca un token ya resuelto (sin volver a consultar el store)."""
        self._sessions.revoke(token)
        record_session_revoked()
        logger.info("Sesión revocada", extra={"user_id": user_id})


# ---------------------------------------------------------------------------
# Dependencias FastAPI
# ---------------------------------------------------------------------------


def require_user_id(
    get_auth: Callable[[], AuthService],
    *,
    header_name: str = DEFAULT_SESSION_HEADER,
    cookie_name: str = DEFAULT_SESSION_COOKIE,
) -> Callable:
    """Dependency FastAPI: requiere token de sesión válido y retorna user_id."""

    def dependency(request: Request, auth: AuthService = Depends(get_auth)) -> str:
        token = extract_session_token(request, header_name, cookie_name)
        user_id = auth.resolve_user_id(token)
        request.state.user_id = user_id
        request.state.session_token = token
        return user_id

    return dependency
