from urllib.parse import quote

from app.services.docs.types import MissingCredentials


def _project(client, auth, **body):
    r = client.post("/api/v1/projects", json={"name": "Orders API", **body}, headers=auth)
    assert r.status_code == 201
    return r.json()["project_id"]


def _upload(client, auth, pid, content: bytes):
    return client.post(
        f"/api/v1/projects/{pid}/documentation",
        files={"file": ("collection.json", content, "application/json")},
        headers=auth,
    )


def test_upload_generates_and_stores_documentation(client, auth, backend):
    backend.text = "# Orders API\n..."
    pid = _project(client, auth, domain="https://orders.example.com")

    r = _upload(client, auth, pid, b'{"a":1}')

    assert r.status_code == 200, r.text
    assert r.json()["documentation"] == "# Orders API\n..."
    prompt = backend.calls[0]["prompt"]
    assert "Orders API" in prompt
    assert "https://orders.example.com" in prompt
    assert '"a": 1' in prompt

    r = client.get(f"/api/v1/projects/{pid}", headers=auth)
    assert r.json()["documentation"] == "# Orders API\n..."


def test_upload_missing_credentials(client, app, auth, backend, store):
    from app.api.v1.documentation import get_generator
    from app.services.docs.generator import DocumentationGenerator
    from app.services.docs.types import GenerationConfig

    app.dependency_overrides[get_generator] = lambda: DocumentationGenerator(GenerationConfig(api_key=None), backend=backend)
    pid = _project(client, auth)

    r = _upload(client, auth, pid, b"{}")

    assert r.status_code == 503
    assert r.json()["detail"] == {"kind": "missing_credentials", "message": MissingCredentials().message}
    assert backend.calls == []
    assert all(d["documentation"] is None for d in store.docs.values())


def test_upload_rejected_key(client, auth, backend, credential_rejection):
    backend.error = credential_rejection
    pid = _project(client, auth)

    r = _upload(client, auth, pid, b"{}")

    assert r.status_code == 502
    assert r.json()["detail"]["kind"] == "invalid_credentials"


def test_upload_empty_response(client, auth, backend):
    backend.text = ""
    pid = _project(client, auth)

    r = _upload(client, auth, pid, b"{}")

    assert r.status_code == 502
    assert r.json()["detail"]["kind"] == "empty_response"


def test_upload_non_utf8_file(client, auth):
    pid = _project(client, auth)
    r = _upload(client, auth, pid, b"\xff\xfe\x00bad")
    assert r.status_code == 400


def test_upload_too_large(client, auth, monkeypatch):
    from app.core.config import settings

    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 10)
    pid = _project(client, auth)
    r = _upload(client, auth, pid, b'{"payload": "more than ten bytes"}')
    assert r.status_code == 413


def test_upload_for_unknown_project(client, auth, backend):
    r = _upload(client, auth, "0123456789abcdef01234567", b"{}")
    assert r.status_code == 404
    assert backend.calls == []


def test_download_documentation(client, auth, backend):
    backend.text = "# Orders API\n"
    pid = _project(client, auth)

    r = client.get(f"/api/v1/projects/{pid}/documentation", headers=auth)
    assert r.status_code == 404
    assert r.json()["detail"] == "No documentation available"

    _upload(client, auth, pid, b"{}")
    r = client.get(f"/api/v1/projects/{pid}/documentation", headers=auth)
    assert r.status_code == 200
    assert r.text == "# Orders API\n"
    assert r.headers["content-type"].startswith("text/markdown")
    assert quote("Orders API-documentation.md") in r.headers["content-disposition"]
