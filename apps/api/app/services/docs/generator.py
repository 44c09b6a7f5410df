from __future__ import annotations

from typing import Optional

import httpx
from loguru import logger

from app.services.docs.prompt import build_prompt
from app.services.docs.types import (
    DocumentationGenerationFailed,
    EmptyResponse,
    GenerationConfig,
    GenerationError,
    GenerationOutcome,
    GenerationRequest,
    GenerationResult,
    InvalidCredentials,
    MissingCredentials,
    UpstreamFailure,
)
from app.services.llm.huggingface import (
    BackendError,
    GenerationBackend,
    GenerationParams,
    HuggingFaceTextGeneration,
)


def _is_credential_rejection(e: Exception) -> bool:
    if isinstance(e, BackendError) and e.status_code == 401:
        return True
    return "invalid credentials" in str(e).lower()


def classify_failure(e: Exception) -> GenerationError:
    if _is_credential_rejection(e):
        return InvalidCredentials()
    return UpstreamFailure(message=f"Failed to generate documentation: {e}")


class DocumentationGenerator:
    """
    Renders the documentation prompt and submits it to the text generation backend.

    One backend call per `generate()`; no retries, caching or deduplication.
    Failures come back as one of the GenerationError variants, never raised.
    """

    def __init__(self, config: GenerationConfig, backend: Optional[GenerationBackend] = None):
        self.config = config
        self._backend = backend

    def _get_backend(self) -> GenerationBackend:
        if self._backend is not None:
            return self._backend
        return HuggingFaceTextGeneration(
            api_key=self.config.api_key or "",
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )

    async def generate(self, request: GenerationRequest) -> GenerationOutcome:
        if not self.config.api_key:
            logger.warning("Documentation generation skipped: no API key configured")
            return MissingCredentials()

        prompt = build_prompt(request)
        params = GenerationParams(
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            top_p=self.config.top_p,
        )
        logger.info(
            "Generating documentation model={} input_chars={} prompt_chars={}",
            self.config.model,
            len(request.raw_input),
            len(prompt),
        )

        try:
            text = await self._get_backend().generate(self.config.model, prompt, params)
        except (BackendError, httpx.HTTPError) as e:
            error = classify_failure(e)
            logger.error("Documentation generation failed kind={} error={!r}", error.kind, str(e))
            return error

        if not text or not text.strip():
            logger.warning("Documentation generation returned an empty response")
            return EmptyResponse()

        logger.info("Documentation generated chars={}", len(text))
        return GenerationResult(text=text)


async def build_and_generate(
    request: GenerationRequest,
    generator: Optional[DocumentationGenerator] = None,
) -> str:
    # Config is read here, not at import, so a missing key surfaces per call.
    generator = generator or DocumentationGenerator(GenerationConfig.from_settings())
    outcome = await generator.generate(request)
    if isinstance(outcome, GenerationResult):
        return outcome.text
    raise DocumentationGenerationFailed(outcome)
