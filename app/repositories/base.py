from typing import Any, Protocol
from bson import ObjectId

from app.models.outcome import MutationOutcome
from app.models.user import ListItem, User


class UserRepository(Protocol):
    """Store for user documents and their embedded to-do lists.

    Mutations touch exactly one user document and report store-native
    matched/modified counts. Store failures propagate to the caller.
    """

    async def ensure_indexes(self) -> None: ...

    async def create_user(self, user: User) -> User: ...

    async def find_user_by_username(self, username: str) -> User | None: ...

    async def append_item(self, username: str, item: ListItem) -> MutationOutcome: ...

    async def update_item_fields(
        self, username: str, item_id: ObjectId, fields: dict[str, Any]
    ) -> MutationOutcome: ...

    async def remove_item(self, username: str, item_id: ObjectId) -> MutationOutcome: ...

    async def clear_items(self, username: str) -> MutationOutcome: ...
