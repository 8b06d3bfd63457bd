from typing import Optional
from bson import ObjectId
from fastapi import APIRouter, Depends, Query, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.auth import JwtPayload, get_current_user
from app.constants import ErrorMessages
from app.database import get_user_repository
from app.models.outcome import NotFound
from app.repositories.base import UserRepository
from app.schemas.list import (
    AddListRequest,
    ListItemOut,
    MessageOut,
    ToDoListOut,
    UpdateListRequest,
    UpdateResultOut,
    ValidationErrorOut,
)
from app.services.list_service import DeleteFlag, ListService

router = APIRouter()
service = ListService()

BAD_REQUEST = {400: {"model": ValidationErrorOut, "description": "Invalid request"}}
NOT_FOUND = {404: {"model": MessageOut}}


def _not_found(message: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": message})


def _query_error(field: str, message: str) -> RequestValidationError:
    return RequestValidationError(
        [{"type": "value_error", "loc": ("query", field), "msg": message, "input": None}]
    )


@router.post(
    "/", response_model=ListItemOut, status_code=201, responses={**BAD_REQUEST, **NOT_FOUND}
)
async def add_to_list(
    body: AddListRequest,
    user: JwtPayload = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    result = await service.add_to_list(repo, user.username, body.title)
    if isinstance(result, NotFound):
        return _not_found(ErrorMessages.USER_NOT_FOUND)
    return ListItemOut.from_item(result.value)


@router.get("/", response_model=ToDoListOut, responses=NOT_FOUND)
async def get_list(
    user: JwtPayload = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    result = await service.get_list(repo, user.username)
    if isinstance(result, NotFound):
        return _not_found(ErrorMessages.USER_NOT_FOUND)
    return ToDoListOut(toDoList=[ListItemOut.from_item(item) for item in result.value])


@router.patch(
    "/",
    response_model=UpdateResultOut,
    responses={**BAD_REQUEST, 304: {"description": "Not modified"}},
)
async def update_list(
    body: UpdateListRequest,
    user: JwtPayload = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    outcome = await service.update_list(
        repo, user.username, ObjectId(body.toDoListId), body.title, body.isDone
    )
    if not outcome.modified:
        # 304 must not carry a body
        return Response(status_code=304)
    return UpdateResultOut.from_outcome(outcome)


@router.delete("/", response_model=UpdateResultOut, responses={**BAD_REQUEST, **NOT_FOUND})
async def delete_list(
    flag: DeleteFlag = Query(...),
    toDoListId: Optional[str] = Query(None),
    user: JwtPayload = Depends(get_current_user),
    repo: UserRepository = Depends(get_user_repository),
):
    item_id = None
    if flag is DeleteFlag.DELETE_ONE:
        if not toDoListId:
            raise _query_error("toDoListId", ErrorMessages.TO_DO_LIST_ID_REQUIRED)
        if not ObjectId.is_valid(toDoListId):
            raise _query_error("toDoListId", ErrorMessages.TO_DO_LIST_ID_INVALID)
        item_id = ObjectId(toDoListId)

    result = await service.delete_list(repo, user.username, item_id, flag)
    if isinstance(result, NotFound):
        return _not_found(ErrorMessages.TO_DO_LIST_ID_NOT_FOUND)
    return UpdateResultOut.from_outcome(result.value)
