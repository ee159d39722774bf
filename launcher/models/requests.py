"""Request models for API endpoints."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ExecuteRequest(BaseModel):
    """Run the n-th match of a query."""

    query: str = Field(..., min_length=1, description="Launcher input text")
    index: int = Field(default=0, ge=0, description="Index into the ranked matches")
    clipboard: Optional[str] = Field(default=None, description="Current clipboard text, if the client shares it")

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("query cannot be blank")
        return v

    class Config:
        json_schema_extra = {
            "examples": [
                {"query": "g python asyncio", "index": 0},
                {"query": "https://example.com"},
            ]
        }


class PriorityUpdate(BaseModel):
    """Request body for changing a plugin's priority."""

    priority: int = Field(..., ge=0, le=100)
