"""User service: admin approval of registered users."""

from uuid import UUID

from dispatch.lifecycle import approvals
from dispatch.lifecycle.errors import ActorNotFound, LifecycleError, Unauthorized, UserNotFound
from dispatch.models.user import User, UserRole
from dispatch.state.repositories import UserRepository
from dispatch.utils.logging import LifecycleLogger


class UserService:
    """Lists users for the admin screens and approves pending registrations."""

    def __init__(self, users: UserRepository):
        self.users = users
        self.logger = LifecycleLogger("user_service")

    async def _get_actor(self, actor_id: UUID) -> User:
        actor = await self.users.fetch_user(actor_id)
        if actor is None:
            raise ActorNotFound(f"User {actor_id} not found")
        return actor

    async def approve_user(self, user_id: UUID, actor_id: UUID) -> User:
        """Approve a user so they can act on orders."""
        actor = await self._get_actor(actor_id)
        user = await self.users.fetch_user(user_id)
        if user is None:
            raise UserNotFound(user_id)

        try:
            approved = approvals.approve_user(user, actor)
        except LifecycleError as e:
            self.logger.log_rejection(e.code, None, str(actor_id), user_id=str(user_id))
            raise

        await self.users.save(approved)
        self.logger.log_approved("user", str(user_id), str(actor_id))
        return approved

    async def list_users(
        self,
        actor_id: UUID,
        role: UserRole | None = None,
        approved: bool | None = None,
    ) -> list[User]:
        """Users an admin manages, optionally narrowed by role and approval."""
        actor = await self._get_actor(actor_id)
        if not approvals.is_approved_admin(actor):
            raise Unauthorized("Only approved admins can list users")

        users = await self.users.list_users(role=role, approved=approved)
        return sorted(users, key=lambda user: user.created_at)
