"""Authentication service with business logic."""

from jose import JWTError

from fintrack.core.exceptions import FinanceAppError, ValidationError
from fintrack.core.security import (
    create_access_token,
    create_refresh_token,
    get_user_id_from_token,
    hash_password,
    verify_password,
)
from fintrack.models.user import User
from fintrack.repositories.user import UserRepository
from fintrack.schemas.auth import TokenPair


def _token_pair(user: User) -> TokenPair:
    return TokenPair(
        access_token=create_access_token(user.id),
        refresh_token=create_refresh_token(user.id),
    )


class AuthService:
    """Service for authentication operations."""

    def __init__(self, user_repo: UserRepository):
        self.user_repo = user_repo

    async def register(self, email: str, password: str, full_name: str) -> User:
        """
        Register a new user.

        Raises:
            ValidationError: If email already exists
        """
        if await self.user_repo.email_exists(email):
            raise ValidationError("AUTH_001")

        user = User(
            email=email,
            password_hash=hash_password(password),
            full_name=full_name,
        )
        return await self.user_repo.create(user)

    async def login(self, email: str, password: str) -> TokenPair:
        """
        Authenticate user and return JWT tokens.

        Raises:
            FinanceAppError: 401 on bad credentials, 403 on deactivated account
        """
        user = await self.user_repo.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise FinanceAppError("AUTH_002", http_status=401)

        if not user.is_active:
            raise FinanceAppError("AUTH_003", http_status=403)

        return _token_pair(user)

    async def refresh_tokens(self, refresh_token: str) -> TokenPair:
        """
        Generate new token pair using refresh token.

        Raises:
            FinanceAppError: If refresh token is invalid or the user is gone/inactive
        """
        try:
            user_id = get_user_id_from_token(refresh_token, expected_type="refresh")
        except (JWTError, ValueError):
            raise FinanceAppError("AUTH_004", http_status=401)

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise FinanceAppError("AUTH_004", http_status=401)
        if not user.is_active:
            raise FinanceAppError("AUTH_003", http_status=403)

        return _token_pair(user)
