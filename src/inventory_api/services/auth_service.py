# src/inventory_api/services/auth_service.py
import logging

from sqlalchemy.exc import IntegrityError

from inventory_api.core.errors import ConflictError, UnauthorizedError
from inventory_api.core.security import hash_password, verify_password, create_access_token
from inventory_api.db.unit_of_work import UnitOfWork
from inventory_api.models.user import User
from inventory_api.schemas.user import RegisterIn, LoginIn, AuthOut

logger = logging.getLogger(__name__)

# one message for every login failure so callers cannot tell which emails exist
INVALID_CREDENTIALS = "Invalid email or password"

# verified against when the email is unknown so every failed login costs one bcrypt check
_DUMMY_HASH = hash_password("inventory-api-dummy-password")


class AuthService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def register(self, payload: RegisterIn) -> AuthOut:
        # email first, then username
        if await self.uow.users.email_exists(payload.email):
            logger.warning("Registration rejected, email already exists: %s", payload.email)
            raise ConflictError("Email already exists")
        if await self.uow.users.username_exists(payload.username):
            logger.warning("Registration rejected, username already exists: %s", payload.username)
            raise ConflictError("Username already exists")

        user = User(
            username=payload.username,
            email=payload.email,
            password_hash=hash_password(payload.password),
            is_active=True,
        )
        self.uow.add(user)
        try:
            await self.uow.commit()
        except IntegrityError as exc:
            # lost the race against a concurrent registration
            raise ConflictError("Username or email already exists") from exc

        logger.info("User registered: %s (id=%s)", user.username, user.user_id)
        return self._issue(user)

    async def login(self, payload: LoginIn) -> AuthOut:
        user = await self.uow.users.get_by_email(payload.email)
        if user is None:
            verify_password(payload.password, _DUMMY_HASH)
        if not user or not user.is_active or not verify_password(payload.password, user.password_hash):
            logger.warning("Failed login for %s", payload.email)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("User logged in: %s", user.username)
        return self._issue(user)

    def _issue(self, user: User) -> AuthOut:
        token, expires_at = create_access_token(
            subject=user.user_id,
            extra={"email": user.email, "username": user.username, "user_id": user.user_id},
        )
        return AuthOut(token=token, username=user.username, email=user.email, expires_at=expires_at)
