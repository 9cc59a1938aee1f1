# catalog_api/core/credentials.py
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError
from fastapi import HTTPException, Request, status

MIN_PASSWORD_LENGTH = 6


class AdminCredentialStore:
    """
    In-memory credentials of the single catalog administrator.

    Seeded once at startup from settings and mutated in place by the
    change-password / change-email endpoints. Nothing is persisted:
    a restart brings back the configured credentials.

    There is no lock around the mutations; admin traffic is a single,
    low-volume writer.
    """

    def __init__(self, email: str, password: str, hasher: PasswordHasher | None = None):
        self._hasher = hasher or PasswordHasher()
        self.email = email
        self._password_hash = self._hasher.hash(password)

    def _check_password(self, password: str) -> bool:
        try:
            return self._hasher.verify(self._password_hash, password)
        except (VerificationError, InvalidHash):
            return False

    def verify_login(self, email: str, password: str) -> bool:
        """True iff both the email and the password match."""
        if email != self.email:
            return False
        return self._check_password(password)

    def _require_current_password(self, current_password: str) -> None:
        if not self._check_password(current_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Current password is incorrect",
            )

    def change_password(self, current_password: str, new_password: str) -> None:
        """
        Replace the stored hash.

        Raises:
            HTTPException(401): current password does not match.
            HTTPException(400): new password shorter than MIN_PASSWORD_LENGTH.
        """
        self._require_current_password(current_password)
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"New password must be at least {MIN_PASSWORD_LENGTH} characters",
            )
        self._password_hash = self._hasher.hash(new_password)

    def change_email(self, current_password: str, new_email: str) -> None:
        """
        Replace the stored email.

        Raises:
            HTTPException(401): current password does not match.
        """
        self._require_current_password(current_password)
        self.email = new_email


def get_credential_store(request: Request) -> AdminCredentialStore:
    """FastAPI dependency returning the credential store attached to the app."""
    return request.app.state.credentials
