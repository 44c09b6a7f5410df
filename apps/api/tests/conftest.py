from datetime import datetime
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.api.v1.documentation import get_generator
from app.db import projects as projects_db
from app.main import create_app
from app.services.docs.generator import DocumentationGenerator
from app.services.docs.types import GenerationConfig
from app.services.llm.huggingface import BackendError


class FakeProjectStore:
    def __init__(self):
        self.docs: Dict[ObjectId, Dict[str, Any]] = {}

    async def create_project(self, user_id: str, name: str, domain: Optional[str] = None, is_deployed: bool = False):
        now = datetime.utcnow()
        doc = {
            "_id": ObjectId(),
            "user_id": user_id,
            "name": name,
            "domain": domain,
            "documentation": None,
            "is_deployed": is_deployed,
            "created_at": now,
            "updated_at": now,
        }
        self.docs[doc["_id"]] = doc
        return dict(doc)

    async def list_projects(self, user_id: str) -> List[Dict[str, Any]]:
        mine = [dict(d) for d in self.docs.values() if d["user_id"] == user_id]
        return sorted(mine, key=lambda d: d["created_at"], reverse=True)

    async def get_project(self, user_id: str, project_id: ObjectId):
        doc = self.docs.get(project_id)
        if not doc or doc["user_id"] != user_id:
            return None
        return dict(doc)

    async def update_project(self, user_id: str, project_id: ObjectId, changes: Dict[str, Any]):
        doc = self.docs.get(project_id)
        if not doc or doc["user_id"] != user_id:
            return None
        doc.update(changes)
        doc["updated_at"] = datetime.utcnow()
        return dict(doc)

    async def save_documentation(self, user_id: str, project_id: ObjectId, documentation: str):
        return await self.update_project(user_id, project_id, {"documentation": documentation})

    async def delete_project(self, user_id: str, project_id: ObjectId) -> bool:
        doc = self.docs.get(project_id)
        if not doc or doc["user_id"] != user_id:
            return False
        del self.docs[project_id]
        return True


class FakeBackend:
    """Records every call; returns `text` or raises `error`."""

    def __init__(self, text: str = "# Generated\n", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate(self, model, prompt, params):
        self.calls.append({"model": model, "prompt": prompt, "params": params})
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def store(monkeypatch):
    fake = FakeProjectStore()
    for name in (
        "create_project",
        "list_projects",
        "get_project",
        "update_project",
        "save_documentation",
        "delete_project",
    ):
        monkeypatch.setattr(projects_db, name, getattr(fake, name))
    return fake


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def config():
    return GenerationConfig(api_key="hf_test_key")


@pytest.fixture
def app(store, backend, config):
    application = create_app()
    application.dependency_overrides[get_generator] = lambda: DocumentationGenerator(config, backend=backend)
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth():
    return {"X-User-Id": "user-1"}


@pytest.fixture
def credential_rejection():
    return BackendError("Invalid credentials in Authorization header", status_code=401)
