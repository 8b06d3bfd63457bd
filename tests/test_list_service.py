import pytest
from bson import ObjectId

from app.models.outcome import Found, MutationOutcome, NotFound
from app.models.user import ListItem, User
from app.services.list_service import DeleteFlag, ListService


@pytest.fixture
def service():
    return ListService()


async def test_get_list_unknown_user_is_not_found(service, repo):
    result = await service.get_list(repo, "nonexistent_user")
    assert result == NotFound("nonexistent_user")


async def test_get_list_empty_list_is_found(service, repo, user):
    await repo.clear_items("u1")
    result = await service.get_list(repo, "u1")
    assert result == Found([])


async def test_add_to_list_appends_pending_item(service, repo, user):
    result = await service.add_to_list(repo, "u1", "C")
    assert isinstance(result, Found)
    assert result.value.title == "C"
    assert result.value.is_done is False

    stored = await repo.find_user_by_username("u1")
    assert [i.title for i in stored.to_do_list] == ["A", "B", "C"]
    assert stored.to_do_list[-1].id == result.value.id


async def test_add_to_list_does_not_create_user(service, repo):
    result = await service.add_to_list(repo, "ghost", "C")
    assert isinstance(result, NotFound)
    assert await repo.find_user_by_username("ghost") is None


async def test_update_list_overwrites_title_and_is_done(service, repo, user):
    i2 = user.to_do_list[1].id
    outcome = await service.update_list(repo, "u1", i2, "B2", True)
    assert outcome == MutationOutcome(matched_count=1, modified_count=1)

    stored = await repo.find_user_by_username("u1")
    assert [(i.title, i.is_done) for i in stored.to_do_list] == [("A", False), ("B2", True)]


async def test_update_list_only_is_done_changed_is_a_modification(service, repo, user):
    i1 = user.to_do_list[0].id
    outcome = await service.update_list(repo, "u1", i1, "A", True)
    assert outcome.modified_count == 1


async def test_update_list_identical_values_match_without_modifying(service, repo, user):
    i1 = user.to_do_list[0].id
    outcome = await service.update_list(repo, "u1", i1, "A", False)
    assert outcome == MutationOutcome(matched_count=1, modified_count=0)


@pytest.mark.parametrize("username", ["u1", "ghost"])
async def test_update_list_unknown_item_matches_nothing(service, repo, user, username):
    before = await repo.find_user_by_username("u1")
    outcome = await service.update_list(repo, username, ObjectId(), "B2", True)
    assert outcome == MutationOutcome(matched_count=0, modified_count=0)
    assert await repo.find_user_by_username("u1") == before


async def test_delete_one_removes_only_that_item(service, repo, user):
    i1, i2 = (item.id for item in user.to_do_list)
    result = await service.delete_list(repo, "u1", i1, DeleteFlag.DELETE_ONE)
    assert result == Found(MutationOutcome(matched_count=1, modified_count=1))

    stored = await repo.find_user_by_username("u1")
    assert [(i.id, i.title) for i in stored.to_do_list] == [(i2, "B")]


async def test_delete_one_keeps_relative_order(service, repo, user):
    await service.add_to_list(repo, "u1", "C")
    await service.delete_list(repo, "u1", user.to_do_list[1].id, DeleteFlag.DELETE_ONE)
    stored = await repo.find_user_by_username("u1")
    assert [i.title for i in stored.to_do_list] == ["A", "C"]


async def test_delete_one_unknown_item_matches_user_only(service, repo, user):
    result = await service.delete_list(repo, "u1", ObjectId(), DeleteFlag.DELETE_ONE)
    assert result == Found(MutationOutcome(matched_count=1, modified_count=0))


async def test_delete_one_requires_id(service, repo, user):
    with pytest.raises(ValueError):
        await service.delete_list(repo, "u1", None, DeleteFlag.DELETE_ONE)


async def test_delete_all_empties_list(service, repo, user):
    result = await service.delete_list(repo, "u1", None, DeleteFlag.DELETE_ALL)
    assert isinstance(result, Found)
    stored = await repo.find_user_by_username("u1")
    assert stored.to_do_list == []

    # already empty
    again = await service.delete_list(repo, "u1", user.to_do_list[0].id, DeleteFlag.DELETE_ALL)
    assert isinstance(again, Found)
    assert again.value.matched_count == 1


@pytest.mark.parametrize("flag", list(DeleteFlag))
async def test_delete_unknown_user_is_not_found(service, repo, flag):
    result = await service.delete_list(repo, "ghost", ObjectId(), flag)
    assert result == NotFound("ghost")


@pytest.fixture
async def other_user(repo, user):
    return await repo.create_user(
        User(username="u2", sub="sub-2", email="u2@example.com", toDoList=[ListItem(title="X")])
    )


async def test_update_list_cannot_reach_another_users_item(service, repo, user, other_user):
    before = await repo.find_user_by_username("u1")
    outcome = await service.update_list(repo, "u2", user.to_do_list[0].id, "hijacked", True)

    assert outcome == MutationOutcome(matched_count=0, modified_count=0)
    assert await repo.find_user_by_username("u1") == before
    stored = await repo.find_user_by_username("u2")
    assert [(i.title, i.is_done) for i in stored.to_do_list] == [("X", False)]


async def test_delete_one_cannot_reach_another_users_item(service, repo, user, other_user):
    before = await repo.find_user_by_username("u1")
    result = await service.delete_list(repo, "u2", user.to_do_list[0].id, DeleteFlag.DELETE_ONE)

    assert result == Found(MutationOutcome(matched_count=1, modified_count=0))
    assert await repo.find_user_by_username("u1") == before
    stored = await repo.find_user_by_username("u2")
    assert [i.title for i in stored.to_do_list] == ["X"]


async def test_delete_all_only_clears_own_list(service, repo, user, other_user):
    await service.delete_list(repo, "u2", None, DeleteFlag.DELETE_ALL)
    stored = await repo.find_user_by_username("u1")
    assert [i.title for i in stored.to_do_list] == ["A", "B"]
