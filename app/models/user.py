from typing import Any
from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


class ListItem(BaseModel):
    """One to-do entry embedded in a user's document."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    id: ObjectId = Field(default_factory=ObjectId, alias="_id")
    title: str
    is_done: bool = Field(default=False, alias="isDone")

    def to_document(self) -> dict[str, Any]:
        return {"_id": self.id, "title": self.title, "isDone": self.is_done}

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "ListItem":
        return cls(_id=doc["_id"], title=doc["title"], isDone=doc.get("isDone", False))


class User(BaseModel):
    """A user document; the embedded to-do list is owned by it."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    username: str
    sub: str
    email: str
    to_do_list: list[ListItem] = Field(default_factory=list, alias="toDoList")

    def to_document(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "sub": self.sub,
            "email": self.email,
            "toDoList": [item.to_document() for item in self.to_do_list],
        }

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "User":
        return cls(
            username=doc["username"],
            sub=doc.get("sub", ""),
            email=doc.get("email", ""),
            toDoList=[ListItem.from_document(d) for d in doc.get("toDoList", [])],
        )
