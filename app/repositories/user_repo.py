import logging
from typing import Any
from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from app.models.outcome import MutationOutcome
from app.models.user import ListItem, User

logger = logging.getLogger(__name__)

LIST_FIELD = "toDoList"


class MongoUserRepository:
    """User documents in MongoDB, one per username, list embedded."""

    collection_name = "users"

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection = db[self.collection_name]
        self._indexes_ready = False

    async def ensure_indexes(self) -> None:
        if self._indexes_ready:
            return
        await self.collection.create_index("username", unique=True)
        self._indexes_ready = True

    async def create_user(self, user: User) -> User:
        try:
            await self.collection.insert_one(user.to_document())
        except PyMongoError as e:
            logger.error(f"Error in insert_one: collection={self.collection_name}, error={e}")
            raise
        return user

    async def find_user_by_username(self, username: str) -> User | None:
        try:
            doc = await self.collection.find_one({"username": username})
        except PyMongoError as e:
            logger.error(
                f"Error in find_one: collection={self.collection_name}, "
                f"username={username}, error={e}"
            )
            raise
        if doc is None:
            return None
        return User.from_document(doc)

    async def append_item(self, username: str, item: ListItem) -> MutationOutcome:
        return await self._update_one(
            {"username": username}, {"$push": {LIST_FIELD: item.to_document()}}
        )

    async def update_item_fields(
        self, username: str, item_id: ObjectId, fields: dict[str, Any]
    ) -> MutationOutcome:
        # positional operator targets the element matched by the filter
        update = {f"{LIST_FIELD}.$.{name}": value for name, value in fields.items()}
        return await self._update_one(
            {"username": username, f"{LIST_FIELD}._id": item_id}, {"$set": update}
        )

    async def remove_item(self, username: str, item_id: ObjectId) -> MutationOutcome:
        return await self._update_one(
            {"username": username}, {"$pull": {LIST_FIELD: {"_id": item_id}}}
        )

    async def clear_items(self, username: str) -> MutationOutcome:
        return await self._update_one({"username": username}, {"$set": {LIST_FIELD: []}})

    async def _update_one(
        self, filter_dict: dict[str, Any], update_dict: dict[str, Any]
    ) -> MutationOutcome:
        try:
            result = await self.collection.update_one(filter_dict, update_dict)
        except PyMongoError as e:
            logger.error(
                f"Error in update_one: collection={self.collection_name}, "
                f"filter={filter_dict}, error={e}"
            )
            raise
        return MutationOutcome(
            matched_count=result.matched_count, modified_count=result.modified_count
        )
