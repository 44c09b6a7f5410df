from datetime import datetime
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import ReturnDocument

from app.db.mongo import get_db

PROJECTS = "projects"

async def ensure_indexes():
    db = get_db()
    await db[PROJECTS].create_index("user_id")
    await db[PROJECTS].create_index([("user_id", 1), ("created_at", -1)])

async def create_project(user_id: str, name: str, domain: Optional[str] = None, is_deployed: bool = False) -> Dict[str, Any]:
    db = get_db()
    now = datetime.utcnow()
    doc = {
        "user_id": user_id,
        "name": name,
        "domain": domain,
        "documentation": None,
        "is_deployed": is_deployed,
        "created_at": now,
        "updated_at": now,
    }
    result = await db[PROJECTS].insert_one(doc)
    doc["_id"] = result.inserted_id
    return doc

async def list_projects(user_id: str) -> List[Dict[str, Any]]:
    db = get_db()
    cursor = db[PROJECTS].find({"user_id": user_id}).sort("created_at", -1)
    return await cursor.to_list(length=None)

async def get_project(user_id: str, project_id: ObjectId) -> Optional[Dict[str, Any]]:
    db = get_db()
    # owner filter: someone else's project reads as missing
    return await db[PROJECTS].find_one({"_id": project_id, "user_id": user_id})

async def update_project(user_id: str, project_id: ObjectId, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    db = get_db()
    return await db[PROJECTS].find_one_and_update(
        {"_id": project_id, "user_id": user_id},
        {"$set": {**changes, "updated_at": datetime.utcnow()}},
        return_document=ReturnDocument.AFTER,
    )

async def save_documentation(user_id: str, project_id: ObjectId, documentation: str) -> Optional[Dict[str, Any]]:
    return await update_project(user_id, project_id, {"documentation": documentation})

async def delete_project(user_id: str, project_id: ObjectId) -> bool:
    db = get_db()
    res = await db[PROJECTS].delete_one({"_id": project_id, "user_id": user_id})
    return res.deleted_count == 1
