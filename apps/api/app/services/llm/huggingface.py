from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx


@dataclass(frozen=True)
class GenerationParams:
    max_tokens: int
    temperature: float
    top_p: float


class BackendError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class GenerationBackend(Protocol):
    async def generate(self, model: str, prompt: str, params: GenerationParams) -> str:
        ...


def _extract_generated_text(data: Any) -> str:
    # The inference API answers with a list of candidates or a single object.
    if isinstance(data, list):
        data = data[0] if data else {}
    if not isinstance(data, dict):
        return ""
    text = data.get("generated_text")
    return text if isinstance(text, str) else ""


def _error_message(r: httpx.Response) -> str:
    try:
        body = r.json()
    except ValueError:
        return r.text or f"HTTP {r.status_code}"
    if isinstance(body, dict) and body.get("error"):
        err = body["error"]
        return err if isinstance(err, str) else str(err)
    return r.text or f"HTTP {r.status_code}"


class HuggingFaceTextGeneration:
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://router.huggingface.co/hf-inference/models",
        timeout: float = 300.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def generate(self, model: str, prompt: str, params: GenerationParams) -> str:
        payload = {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": params.max_tokens,
                "temperature": params.temperature,
                "top_p": params.top_p,
            },
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            r = await client.post(f"{self.base_url}/{model}", json=payload, headers=headers)

        if r.is_error:
            raise BackendError(_error_message(r), status_code=r.status_code)

        try:
            data = r.json()
        except ValueError as e:
            raise BackendError("Malformed response from text generation backend", status_code=r.status_code) from e
        return _extract_generated_text(data)
