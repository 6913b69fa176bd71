"""Firebase Admin initialization, token verification and auth error messages."""

import os
from typing import Any, Dict, Optional

from app.utils.logger import get_logger

logger = get_logger(__name__)


# Provider error codes the sign-in and settings screens surface to users.
AUTH_ERROR_MESSAGES: Dict[str, str] = {
    "auth/invalid-credential": "Invalid credentials. Please try again.",
    "auth/user-not-found": "Invalid credentials. Please try again.",
    "auth/wrong-password": "Invalid credentials. Please try again.",
    "auth/invalid-email": "The email address is not valid.",
    "auth/popup-closed-by-user": "The sign-in window was closed before completing. Please try again.",
    "auth/popup-blocked": "The sign-in popup was blocked by the browser. Please allow popups and try again.",
    "auth/operation-not-allowed": (
        "This sign-in method is not enabled. An administrator must enable it in the Firebase Console."
    ),
    "auth/too-many-requests": (
        "Access to this account has been temporarily disabled due to many failed login attempts. "
        "You can try again later."
    ),
    "auth/network-request-failed": (
        "A network error occurred. Please check your internet connection and try again."
    ),
    "auth/invalid-phone-number": (
        "The phone number is not valid. Please enter it in E.164 format (e.g., +12223334444)."
    ),
    "auth/code-expired": "The verification code has expired. Please request a new one.",
    "auth/invalid-verification-code": "The verification code you entered is invalid.",
    "auth/requires-recent-login": (
        "This is a sensitive action. Please log out and log back in to continue."
    ),
}


def describe_auth_error(code: Optional[str]) -> str:
    """
    Human-readable message for an authentication provider error code.

    Unknown codes get a generic message that still carries the raw code so
    it can be diagnosed.
    """
    if code in AUTH_ERROR_MESSAGES:
        return AUTH_ERROR_MESSAGES[code]
    return f"An unexpected error occurred. (Code: {code or 'N/A'})"


class FirebaseService:
    """Firebase Admin app lifecycle and ID-token verification."""

    def __init__(self, credentials_path: Optional[str] = None):
        """Initialize Firebase Admin SDK.

        Args:
            credentials_path: Path to Firebase credentials JSON file.
                            If None, looks for FIREBASE_CREDENTIALS_PATH env var
                            or uses default application credentials.
        """
        self._app = None
        self._auth = None
        self._initialized = False

        try:
            self.initialize(credentials_path)
        except Exception as e:
            logger.error(f"Failed to initialize Firebase service: {e}")

    def initialize(self, credentials_path: Optional[str] = None) -> bool:
        """Initialize Firebase Admin SDK with credentials.

        Returns:
            True if initialization successful, False otherwise
        """
        import firebase_admin
        from firebase_admin import auth, credentials

        if credentials_path is None:
            credentials_path = os.getenv("FIREBASE_CREDENTIALS_PATH")

        if firebase_admin._apps:
            self._app = firebase_admin.get_app()
        elif credentials_path and os.path.exists(credentials_path):
            cred = credentials.Certificate(credentials_path)
            self._app = firebase_admin.initialize_app(cred)
            logger.info(f"Firebase initialized with credentials: {credentials_path}")
        else:
            self._app = firebase_admin.initialize_app()
            logger.info("Firebase initialized with default credentials")

        self._auth = auth
        self._initialized = True
        return True

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def firestore_client(self) -> Any:
        """Firestore client bound to this app."""
        from firebase_admin import firestore

        if not self._initialized:
            raise RuntimeError("Firebase not initialized")
        return firestore.client(self._app)

    def verify_token(self, token: str) -> Optional[Dict]:
        """Verify a Firebase ID token.

        Args:
            token: Firebase ID token from the client SDK

        Returns:
            Decoded claims (uid, email, name, ...), or None if the token is invalid

        Raises:
            ValueError: If token is empty
        """
        if not token:
            raise ValueError("Token cannot be empty")

        if not self._initialized:
            raise RuntimeError("Firebase not initialized")

        try:
            decoded_token = self._auth.verify_id_token(token)
        except (self._auth.InvalidIdTokenError, self._auth.ExpiredIdTokenError,
                self._auth.RevokedIdTokenError) as e:
            logger.warning(f"Rejected ID token: {e}")
            return None

        logger.debug(f"Token verified for user: {decoded_token.get('uid')}")
        return decoded_token

    def get_user(self, uid: str) -> Optional[Dict]:
        """Get a user record by ID, or None if there is no such user."""
        if not uid:
            raise ValueError("uid cannot be empty")

        if not self._initialized:
            raise RuntimeError("Firebase not initialized")

        try:
            user = self._auth.get_user(uid)
        except self._auth.UserNotFoundError:
            return None

        return {
            "uid": user.uid,
            "email": user.email,
            "display_name": user.display_name,
            "phone_number": user.phone_number,
            "disabled": user.disabled,
            "providers": [info.provider_id for info in user.provider_data],
        }


_firebase_service: Optional[FirebaseService] = None


def get_firebase_service(credentials_path: Optional[str] = None) -> FirebaseService:
    """Get or create the FirebaseService singleton."""
    global _firebase_service
    if _firebase_service is None:
        _firebase_service = FirebaseService(credentials_path)
    return _firebase_service
