"""
Status endpoint used to check the service is online.
"""

from fastapi import APIRouter

from user_api.schemas.base import ResponseMessage

router = APIRouter(prefix="/api", tags=["status"])


@router.get("/status", response_model=ResponseMessage)
def get_status() -> ResponseMessage:
    """Static health payload."""
    return ResponseMessage(Message="Status is okay!")
