import logging
from enum import Enum
from bson import ObjectId

from app.models.outcome import Found, Lookup, MutationOutcome, NotFound
from app.models.user import ListItem
from app.repositories.base import UserRepository

logger = logging.getLogger(__name__)


class DeleteFlag(str, Enum):
    DELETE_ONE = "DELETE_ONE"
    DELETE_ALL = "DELETE_ALL"


class ListService:
    """List mutation semantics, independent of transport.

    Each call issues one store operation against one user document. A missing
    user is reported as NotFound; a missing item as a zero-count outcome.
    """

    async def add_to_list(
        self, repo: UserRepository, username: str, title: str
    ) -> Lookup[ListItem]:
        item = ListItem(title=title)
        outcome = await repo.append_item(username, item)
        if not outcome.matched:
            logger.debug(f"add_to_list: no user {username}")
            return NotFound(username)
        logger.debug(f"add_to_list: user={username} item={item.id}")
        return Found(item)

    async def get_list(self, repo: UserRepository, username: str) -> Lookup[list[ListItem]]:
        user = await repo.find_user_by_username(username)
        if user is None:
            return NotFound(username)
        return Found(user.to_do_list)

    async def update_list(
        self,
        repo: UserRepository,
        username: str,
        to_do_list_id: ObjectId,
        title: str,
        is_done: bool,
    ) -> MutationOutcome:
        outcome = await repo.update_item_fields(
            username, to_do_list_id, {"title": title, "isDone": is_done}
        )
        logger.debug(
            f"update_list: user={username} item={to_do_list_id} "
            f"matched={outcome.matched_count} modified={outcome.modified_count}"
        )
        return outcome

    async def delete_list(
        self,
        repo: UserRepository,
        username: str,
        to_do_list_id: ObjectId | None,
        flag: DeleteFlag,
    ) -> Lookup[MutationOutcome]:
        if flag is DeleteFlag.DELETE_ONE:
            if to_do_list_id is None:
                raise ValueError("DELETE_ONE requires a to-do list id")
            outcome = await repo.remove_item(username, to_do_list_id)
        elif flag is DeleteFlag.DELETE_ALL:
            outcome = await repo.clear_items(username)
        else:
            raise ValueError(f"unsupported delete flag: {flag!r}")

        if not outcome.matched:
            return NotFound(username)
        logger.debug(
            f"delete_list: user={username} flag={flag.value} modified={outcome.modified_count}"
        )
        return Found(outcome)
