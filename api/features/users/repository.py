"""User repository using base repository pattern."""
from typing import List, Optional

from api.features.users.entities.user import User, UserRole
from api.shared.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Repository for user entities with role-aware queries."""

    model = User

    async def get_by_username(self, username: str) -> Optional[User]:
        entities = await self.get_by_field("username", username, limit=1)
        return entities[0] if entities else None

    async def get_by_role(self, role: UserRole) -> List[User]:
        entities, _ = await self.list(
            offset=0, limit=None, order_by="created_at", role=role
        )
        return entities

    async def get_with_role(self, user_id: str, role: UserRole) -> Optional[User]:
        entity = await self.get_by_id(user_id)
        if entity is None or entity.role != role:
            return None
        return entity
