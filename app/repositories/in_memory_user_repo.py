"""In-memory user repository for tests and local runs without MongoDB."""

import copy
from typing import Any
from bson import ObjectId

from app.models.outcome import NO_MATCH, MutationOutcome
from app.models.user import ListItem, User


class InMemoryUserRepository:
    """Keeps user documents in a dict keyed by username.

    Reports matched/modified counts the way MongoDB does for the equivalent
    update_one calls, so callers can be tested without a server.
    """

    def __init__(self) -> None:
        self._users: dict[str, dict[str, Any]] = {}

    async def ensure_indexes(self) -> None:
        return None

    async def create_user(self, user: User) -> User:
        if user.username in self._users:
            raise ValueError(f"duplicate username: {user.username}")
        self._users[user.username] = user.to_document()
        return user

    async def find_user_by_username(self, username: str) -> User | None:
        doc = self._users.get(username)
        if doc is None:
            return None
        return User.from_document(copy.deepcopy(doc))

    async def append_item(self, username: str, item: ListItem) -> MutationOutcome:
        doc = self._users.get(username)
        if doc is None:
            return NO_MATCH
        doc["toDoList"].append(item.to_document())
        return MutationOutcome(matched_count=1, modified_count=1)

    async def update_item_fields(
        self, username: str, item_id: ObjectId, fields: dict[str, Any]
    ) -> MutationOutcome:
        doc = self._users.get(username)
        if doc is None:
            return NO_MATCH
        for entry in doc["toDoList"]:
            if entry["_id"] == item_id:
                changed = any(entry.get(k) != v for k, v in fields.items())
                entry.update(fields)
                return MutationOutcome(matched_count=1, modified_count=int(changed))
        return NO_MATCH

    async def remove_item(self, username: str, item_id: ObjectId) -> MutationOutcome:
        doc = self._users.get(username)
        if doc is None:
            return NO_MATCH
        kept = [entry for entry in doc["toDoList"] if entry["_id"] != item_id]
        removed = len(kept) != len(doc["toDoList"])
        doc["toDoList"] = kept
        return MutationOutcome(matched_count=1, modified_count=int(removed))

    async def clear_items(self, username: str) -> MutationOutcome:
        doc = self._users.get(username)
        if doc is None:
            return NO_MATCH
        had_items = bool(doc["toDoList"])
        doc["toDoList"] = []
        return MutationOutcome(matched_count=1, modified_count=int(had_items))
