from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response
from loguru import logger

from app.api.deps import get_current_user_id, parse_project_id
from app.api.v1.projects import to_project_out
from app.core.config import settings
from app.db import projects as projects_db
from app.schemas.documentation import GenerationErrorOut
from app.schemas.project import ProjectOut
from app.services.docs.generator import DocumentationGenerator, build_and_generate
from app.services.docs.prompt import DEFAULT_TITLE
from app.services.docs.types import DocumentationGenerationFailed, GenerationConfig, GenerationRequest

router = APIRouter(tags=["documentation"])

ERROR_STATUS = {
    "missing_credentials": 503,
    "invalid_credentials": 502,
    "empty_response": 502,
    "upstream_failure": 502,
}

def get_generator() -> DocumentationGenerator:
    return DocumentationGenerator(GenerationConfig.from_settings())

async def _read_upload(file: UploadFile) -> str:
    raw = await file.read(settings.MAX_UPLOAD_BYTES + 1)
    if len(raw) > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(status_code=413, detail="Uploaded file is too large")
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Uploaded file must be UTF-8 text")

@router.post(
    "/projects/{project_id}/documentation",
    response_model=ProjectOut,
    responses={502: {"model": GenerationErrorOut}, 503: {"model": GenerationErrorOut}},
)
async def generate_project_documentation(
    project_id: str,
    file: UploadFile = File(..., description="API collection JSON"),
    user_id: str = Depends(get_current_user_id),
    generator: DocumentationGenerator = Depends(get_generator),
):
    pid = parse_project_id(project_id)
    project = await projects_db.get_project(user_id, pid)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    content = await _read_upload(file)
    request = GenerationRequest(
        name=project.get("name") or DEFAULT_TITLE,
        description=project.get("domain") or "",
        raw_input=content,
    )

    try:
        documentation = await build_and_generate(request, generator)
    except DocumentationGenerationFailed as e:
        logger.info("project={} documentation failed kind={}", project_id, e.kind)
        raise HTTPException(
            status_code=ERROR_STATUS[e.kind],
            detail=GenerationErrorOut(kind=e.kind, message=e.error.message).model_dump(),
        )

    doc = await projects_db.save_documentation(user_id, pid, documentation)
    if not doc:
        raise HTTPException(status_code=404, detail="Project not found")
    return to_project_out(doc)

@router.get("/projects/{project_id}/documentation")
async def download_project_documentation(project_id: str, user_id: str = Depends(get_current_user_id)):
    project = await projects_db.get_project(user_id, parse_project_id(project_id))
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    documentation = project.get("documentation")
    if not documentation:
        raise HTTPException(status_code=404, detail="No documentation available")

    filename = f"{project.get('name') or 'api'}-documentation.md"
    return Response(
        content=documentation,
        media_type="text/markdown",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"},
    )
