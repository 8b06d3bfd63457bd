class ErrorMessages:
    TITLE_REQUIRED = "title is required and must be a non-empty string"
    IS_DONE_REQUIRED = "isDone is required and must be a boolean"
    TO_DO_LIST_ID_REQUIRED = "toDoListId is required"
    TO_DO_LIST_ID_INVALID = "toDoListId must be a 24 character hex string"
    TO_DO_LIST_ID_NOT_FOUND = "to-do list not found"
    FLAG_MUST_BE = "flag must be one of DELETE_ALL, DELETE_ONE"
    USER_NOT_FOUND = "user not found"
    UNAUTHORIZED = "Missing or invalid authorization token"
