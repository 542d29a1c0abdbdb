"""
Business logic for accounts.

``AccountService`` registers accounts and authenticates them.  Passwords
are stored only as salted PBKDF2 hashes and login returns a signed
token valid for exactly one hour.
"""

import logging

from ..core.config import Settings
from ..core.exceptions import AuthError, ConflictError, NotFoundError
from ..core.security import create_access_token, hash_password, verify_password
from ..repositories.base import DocumentCollection
from .validators import require_email, require_min_length

logger = logging.getLogger(__name__)

TOKEN_LIFETIME_SECONDS = 3600


class AccountService:
    """Service for registering and authenticating accounts."""

    def __init__(self, accounts: DocumentCollection, settings: Settings) -> None:
        self.accounts = accounts
        self.settings = settings

    async def register(self, username, email, password) -> str:
        """Create a new account.

        Validation fails fast in this order: username (3+ chars), email
        (must contain ``@``), password (6+ chars).  Only then is the
        store queried for an account with the same email.  Returns a
        confirmation message; neither the account nor a token is
        returned.
        """
        require_min_length(username, 3, "Username must be at least 3 characters long!")
        require_email(email)
        require_min_length(password, 6, "Password must be at least 6 characters long!")

        existing = await self.accounts.find_one({"email": email})
        if existing:
            raise ConflictError("Email already in use")

        hashed = hash_password(password, self.settings.password_hash_iterations)
        account = await self.accounts.save(
            {"username": username, "email": email, "password": hashed}
        )
        logger.info("Registered account %s", account["id"])
        return "User registered successfully!"

    async def authenticate(self, email, password) -> str:
        """Verify credentials and return a signed access token.

        The token carries the account id (``sub`` and ``user_id``) and
        the email.
        """
        account = await self.accounts.find_one({"email": email})
        if not account:
            raise NotFoundError("User not found!")
        if not verify_password(password or "", account.get("password", "")):
            logger.info("Rejected login for account %s", account["id"])
            raise AuthError("Incorrect password!")

        token = create_access_token(
            {"sub": account["id"], "user_id": account["id"], "email": account["email"]},
            self.settings.secret_key,
            expires_delta=TOKEN_LIFETIME_SECONDS,
            algorithm=self.settings.algorithm,
        )
        logger.info("Issued token for account %s", account["id"])
        return token
