"""Account service - users and their Todoist connection."""

from __future__ import annotations

from todosync_cli.exceptions import ValidationError
from todosync_cli.models import ConnectionStatus, User
from todosync_cli.repositories import UserRepository


class AccountService:
    """Service for users and their stored Todoist credential."""

    def __init__(self, user_repository: UserRepository):
        self.repository = user_repository

    async def create_user(self, email: str, name: str | None = None) -> User:
        """Register a user.

        Raises:
            ValidationError: If the email is blank or already registered
        """
        email = email.strip()
        if not email:
            raise ValidationError("Email must not be empty")
        return await self.repository.create(email, name)

    async def get_user(self, user_id: str) -> User:
        return await self.repository.get(user_id)

    async def list_users(self) -> list[User]:
        return await self.repository.list_all()

    async def set_todoist_token(self, user_id: str, token: str | None) -> None:
        """Store the user's Todoist token; None or blank disconnects."""
        await self.repository.set_todoist_token(user_id, token)

    async def get_connection_status(self, user_id: str) -> ConnectionStatus:
        """Connected iff a non-empty token is stored for the user."""
        token = await self.repository.get_todoist_token(user_id)
        return ConnectionStatus(connected=bool(token and token.strip()))


def get_account_service() -> AccountService:
    """Factory function to get an AccountService instance."""
    from todosync_cli.services.storage import get_storage

    return AccountService(get_storage().user_repository)
