from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

from app.core.config import settings


@dataclass(frozen=True)
class GenerationRequest:
    name: str
    description: str = ""
    raw_input: str = ""


@dataclass(frozen=True)
class GenerationResult:
    text: str


@dataclass(frozen=True)
class GenerationConfig:
    """Credential, endpoint and decoding parameters for one generator instance."""

    api_key: Optional[str]
    model: str = "mistralai/Mistral-7B-Instruct-v0.2"
    max_tokens: int = 4000
    temperature: float = 0.7
    top_p: float = 0.95
    base_url: str = "https://router.huggingface.co/hf-inference/models"
    timeout: float = 300.0

    @classmethod
    def from_settings(cls) -> "GenerationConfig":
        return cls(
            api_key=settings.HUGGINGFACE_API_KEY,
            model=settings.HF_MODEL,
            max_tokens=settings.GEN_MAX_TOKENS,
            temperature=settings.GEN_TEMPERATURE,
            top_p=settings.GEN_TOP_P,
            base_url=settings.HF_INFERENCE_URL,
            timeout=settings.HF_TIMEOUT_SECONDS,
        )


# Closed error set. Routes branch on `kind`, never on exception types.

@dataclass(frozen=True)
class MissingCredentials:
    message: str = "Hugging Face API key is missing. Check your environment variables."
    kind: Literal["missing_credentials"] = "missing_credentials"


@dataclass(frozen=True)
class InvalidCredentials:
    message: str = "Invalid Hugging Face API key. Please check your configuration."
    kind: Literal["invalid_credentials"] = "invalid_credentials"


@dataclass(frozen=True)
class EmptyResponse:
    message: str = "No documentation was generated. The AI response was empty."
    kind: Literal["empty_response"] = "empty_response"


@dataclass(frozen=True)
class UpstreamFailure:
    message: str
    kind: Literal["upstream_failure"] = "upstream_failure"


GenerationError = Union[MissingCredentials, InvalidCredentials, EmptyResponse, UpstreamFailure]
GenerationOutcome = Union[GenerationResult, GenerationError]


class DocumentationGenerationFailed(Exception):
    """Raised by build_and_generate; wraps one GenerationError variant."""

    def __init__(self, error: GenerationError):
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> str:
        return self.error.kind
