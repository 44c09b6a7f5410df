from pydantic import BaseModel
from typing import Literal

class GenerationErrorOut(BaseModel):
    kind: Literal["missing_credentials", "invalid_credentials", "empty_response", "upstream_failure"]
    message: str
