from typing import Optional

from bson import ObjectId
from fastapi import Header, HTTPException


async def get_current_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    # Set by the auth gateway in front of this service.
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="You must be logged in to access projects")
    return x_user_id.strip()


def parse_project_id(project_id: str) -> ObjectId:
    try:
        return ObjectId(project_id)
    except Exception:
        raise HTTPException(status_code=400, detail="Invalid project_id")
