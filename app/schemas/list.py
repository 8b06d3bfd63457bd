from typing import Any, Optional
from pydantic import BaseModel, Field

from app.models.outcome import MutationOutcome
from app.models.user import ListItem

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"


class AddListRequest(BaseModel):
    title: str = Field(min_length=1)


class UpdateListRequest(BaseModel):
    title: str = Field(min_length=1)
    isDone: bool
    toDoListId: str = Field(pattern=OBJECT_ID_PATTERN)


class ListItemOut(BaseModel):
    id: str = Field(alias="_id")
    title: str
    isDone: bool

    @classmethod
    def from_item(cls, item: ListItem) -> "ListItemOut":
        return cls(_id=str(item.id), title=item.title, isDone=item.is_done)


class ToDoListOut(BaseModel):
    toDoList: list[ListItemOut]


class UpdateResultOut(BaseModel):
    acknowledged: bool = True
    matchedCount: int
    modifiedCount: int
    upsertedId: Optional[str] = None
    upsertedCount: int = 0

    @classmethod
    def from_outcome(cls, outcome: MutationOutcome) -> "UpdateResultOut":
        return cls(matchedCount=outcome.matched_count, modifiedCount=outcome.modified_count)


class MessageOut(BaseModel):
    message: str


class ValidationErrorOut(BaseModel):
    errors: list[dict[str, Any]]
