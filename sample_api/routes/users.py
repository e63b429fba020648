from __future__ import annotations

from fastapi import APIRouter, status

from sample_api.services.users_service import list_users as svc_list_users
from sample_types.common import ApiResponse
from sample_types.users import User

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=ApiResponse[list[User]],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def list_users() -> ApiResponse[list[User]]:
    # Keep the body's status in step with the route's status_code.
    return ApiResponse[list[User]](data=svc_list_users(), status=status.HTTP_200_OK)
