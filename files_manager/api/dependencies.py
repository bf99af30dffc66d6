"""
Dependencias FastAPI compartidas por los routers.

`current_user_id` resuelve el token de sesión (header X-Token o cookie)
contra el SessionStore; es la única fuente de verdad del usuario actual.
"""

from __future__ import annotations

from ..container import get_auth_service
from ..crosscutting.config import get_settings
from ..identity.auth_users import require_user_id

_settings = get_settings()

current_user_id = require_user_id(
    get_auth_service,
    header_name=_settings.session_header,
    cookie_name=_settings.session_cookie_name,
)
