"""
Shared application dependencies.
Supports both Firebase mode and local development mode.
"""

import hashlib
import os
import time
from typing import Dict, Optional

from fastapi import Depends, Header

from app.config import Settings, get_settings
from app.crud.base import StoreContext
from app.services.ai.groq_service import GroqService
from app.store.events import DiagnosticsLog, ErrorBus
from app.store.policy import ANONYMOUS, AccessPolicy, AdminDirectory, AuthContext
from app.store.writes import WritePipeline
from app.utils.exceptions import AuthenticationError, AuthorizationError
from app.utils.logger import get_logger

logger = get_logger(__name__)

# Global Instances
_db_client = None
_groq_service = None
_error_bus: Optional[ErrorBus] = None
_diagnostics: Optional[DiagnosticsLog] = None
_is_local_mode = None

_access_policy = AccessPolicy()


def _check_local_mode() -> bool:
    """Determine if we should use local mode (no Firebase)."""
    global _is_local_mode
    if _is_local_mode is not None:
        return _is_local_mode

    cred_path = get_settings().firebase_credentials_path

    if not cred_path or not os.path.exists(cred_path):
        logger.info("Firebase credentials not found - running in LOCAL DEV mode")
        _is_local_mode = True
    else:
        _is_local_mode = False

    return _is_local_mode


def get_db_client(settings: Settings = Depends(get_settings)):
    """Get database client - Firestore in prod, LocalStore in dev."""
    global _db_client
    if _db_client is not None:
        return _db_client

    if _check_local_mode():
        from app.services.local_store import get_local_store
        _db_client = get_local_store()
        logger.info("Using LocalStore (in-memory) database")
    else:
        from app.services.firebase.auth_service import get_firebase_service
        _db_client = get_firebase_service(settings.firebase_credentials_path).firestore_client()
        logger.info("Using Firestore database")

    return _db_client


def get_error_bus() -> ErrorBus:
    """Application-wide error bus (the diagnostics log is attached at startup)."""
    global _error_bus
    if _error_bus is None:
        _error_bus = ErrorBus()
    return _error_bus


def get_diagnostics_log(settings: Settings = Depends(get_settings)) -> DiagnosticsLog:
    global _diagnostics
    if _diagnostics is None:
        _diagnostics = DiagnosticsLog(maxlen=settings.diagnostics_buffer_size)
    return _diagnostics


def get_access_policy() -> AccessPolicy:
    return _access_policy


def get_write_pipeline(
    db_client=Depends(get_db_client),
    bus: ErrorBus = Depends(get_error_bus),
    policy: AccessPolicy = Depends(get_access_policy),
) -> WritePipeline:
    return WritePipeline(db_client, bus, policy)


def get_store(
    db_client=Depends(get_db_client),
    bus: ErrorBus = Depends(get_error_bus),
    policy: AccessPolicy = Depends(get_access_policy),
    writes: WritePipeline = Depends(get_write_pipeline),
) -> StoreContext:
    return StoreContext(db=db_client, bus=bus, policy=policy, writes=writes)


def get_admin_directory(
    db_client=Depends(get_db_client),
    settings: Settings = Depends(get_settings),
) -> AdminDirectory:
    return AdminDirectory(db_client, settings.bootstrap_admin_uid)


def get_groq_service(settings: Settings = Depends(get_settings)) -> Optional[GroqService]:
    """Get Groq service instance, or None when no API key is configured."""
    global _groq_service
    if _groq_service is not None:
        return _groq_service

    if not settings.groq_api_key:
        logger.warning("No Groq API key - AI flows will report an error")
        return None

    _groq_service = GroqService(
        api_key=settings.groq_api_key,
        model=settings.groq_model,
        timeout=settings.groq_timeout,
    )
    return _groq_service


# Local Auth Store (for dev mode without Firebase)
_local_tokens: Dict[str, Dict[str, Optional[str]]] = {}  # token -> claims


def local_issue_token(uid: str, email: Optional[str] = None, name: Optional[str] = None) -> str:
    """Issue a dev-mode bearer token for ``uid``."""
    token = hashlib.sha256(f"{uid}:{time.time_ns()}".encode()).hexdigest()
    _local_tokens[token] = {"uid": uid, "email": email, "name": name}
    return token


def local_verify_token(token: str) -> Optional[Dict[str, Optional[str]]]:
    return _local_tokens.get(token)


def _decode_token(token: str, settings: Settings) -> Optional[Dict]:
    if _check_local_mode():
        return local_verify_token(token)

    from app.services.firebase.auth_service import get_firebase_service
    return get_firebase_service(settings.firebase_credentials_path).verify_token(token)


async def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    admins: AdminDirectory = Depends(get_admin_directory),
) -> AuthContext:
    """Resolve the bearer token into an AuthContext (admin flag included)."""
    if not authorization:
        raise AuthenticationError("Authorization header missing")

    if not authorization.startswith("Bearer "):
        raise AuthenticationError("Invalid authorization header format")

    claims = _decode_token(authorization[len("Bearer "):], settings)
    if not claims:
        raise AuthenticationError("Invalid or expired token")

    return admins.context_for(
        uid=claims["uid"],
        email=claims.get("email"),
        display_name=claims.get("name"),
    )


async def get_optional_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    admins: AdminDirectory = Depends(get_admin_directory),
) -> AuthContext:
    """Current user if authenticated, otherwise the anonymous context."""
    if not authorization or not authorization.startswith("Bearer "):
        return ANONYMOUS
    try:
        return await get_current_user(authorization, settings, admins)
    except AuthenticationError:
        return ANONYMOUS


async def require_admin(user: AuthContext = Depends(get_current_user)) -> AuthContext:
    if not user.is_admin:
        raise AuthorizationError("Admin access required")
    return user
