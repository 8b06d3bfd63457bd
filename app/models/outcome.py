from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class MutationOutcome:
    """Store-native result of a single-document update."""

    matched_count: int
    modified_count: int

    @property
    def matched(self) -> bool:
        return self.matched_count > 0

    @property
    def modified(self) -> bool:
        return self.modified_count > 0


NO_MATCH = MutationOutcome(matched_count=0, modified_count=0)


@dataclass(frozen=True)
class Found(Generic[T]):
    value: T


@dataclass(frozen=True)
class NotFound:
    username: str


Lookup = Union[Found[T], NotFound]
