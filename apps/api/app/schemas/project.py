from pydantic import BaseModel, Field, HttpUrl, field_validator
from typing import Optional
from datetime import datetime

class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    domain: Optional[HttpUrl] = Field(None, description="Public URL of the API, or empty")
    is_deployed: bool = False

    @field_validator("domain", mode="before")
    @classmethod
    def blank_domain_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

class ProjectUpdate(ProjectCreate):
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    is_deployed: Optional[bool] = None

class ProjectOut(BaseModel):
    project_id: str
    name: str
    domain: Optional[str] = None
    documentation: Optional[str] = None
    is_deployed: bool = False
    created_at: datetime
    updated_at: datetime
