from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Response

from app.api.deps import get_current_user_id, parse_project_id
from app.db import projects as projects_db
from app.schemas.project import ProjectCreate, ProjectOut, ProjectUpdate

router = APIRouter(tags=["projects"])

def to_project_out(doc: Dict[str, Any]) -> ProjectOut:
    return ProjectOut(
        project_id=str(doc["_id"]),
        name=doc.get("name", ""),
        domain=doc.get("domain"),
        documentation=doc.get("documentation"),
        is_deployed=bool(doc.get("is_deployed", False)),
        created_at=doc["created_at"],
        updated_at=doc.get("updated_at") or doc["created_at"],
    )

@router.post("/projects", response_model=ProjectOut, status_code=201)
async def create_project(payload: ProjectCreate, user_id: str = Depends(get_current_user_id)):
    doc = await projects_db.create_project(
        user_id=user_id,
        name=payload.name,
        domain=str(payload.domain) if payload.domain else None,
        is_deployed=payload.is_deployed,
    )
    return to_project_out(doc)

@router.get("/projects", response_model=list[ProjectOut])
async def list_projects(user_id: str = Depends(get_current_user_id)):
    docs = await projects_db.list_projects(user_id)
    return [to_project_out(d) for d in docs]

@router.get("/projects/{project_id}", response_model=ProjectOut)
async def get_project(project_id: str, user_id: str = Depends(get_current_user_id)):
    doc = await projects_db.get_project(user_id, parse_project_id(project_id))
    if not doc:
        raise HTTPException(status_code=404, detail="Project not found")
    return to_project_out(doc)

@router.patch("/projects/{project_id}", response_model=ProjectOut)
async def update_project(project_id: str, payload: ProjectUpdate, user_id: str = Depends(get_current_user_id)):
    pid = parse_project_id(project_id)
    changes = payload.model_dump(exclude_unset=True)
    # name and is_deployed cannot be cleared, only domain can
    changes = {k: v for k, v in changes.items() if v is not None or k == "domain"}
    if changes.get("domain") is not None:
        changes["domain"] = str(changes["domain"])

    if not changes:
        doc = await projects_db.get_project(user_id, pid)
    else:
        doc = await projects_db.update_project(user_id, pid, changes)
    if not doc:
        raise HTTPException(status_code=404, detail="Project not found")
    return to_project_out(doc)

@router.delete("/projects/{project_id}", status_code=204)
async def delete_project(project_id: str, user_id: str = Depends(get_current_user_id)):
    deleted = await projects_db.delete_project(user_id, parse_project_id(project_id))
    if not deleted:
        raise HTTPException(status_code=404, detail="Project not found")
    return Response(status_code=204)
