"""
Liveness endpoint for API v1.

Publicly accessible; returns a fixed message so clients and load
balancers can check that the API is up.
"""

from fastapi import APIRouter

from employee_directory_api.app.schemas.common import MessageResponse

router = APIRouter()


@router.get("/", response_model=MessageResponse)
async def get_info() -> MessageResponse:
    return MessageResponse(message="API is working!")
