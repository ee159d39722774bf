"""Plugin manifest model - describes a packaged plugin's metadata and matching config."""

from typing import Any, Dict
from pydantic import BaseModel, Field, field_validator


class PluginManifest(BaseModel):
    """Plugin manifest loaded from plugin.json."""

    id: str = Field(..., min_length=1, description="Unique plugin identifier (kebab-case)")
    name: str = Field(..., min_length=1, description="Human-readable plugin name, also the fuzzy match target")
    version: str = Field(default="1.0.0", description="Plugin version")
    description: str = Field(default="", description="Plugin description")
    author: str = Field(default="", description="Plugin author")
    entry_point: str = Field(
        ...,
        description="Python module:function path relative to plugin directory, e.g. 'plugin:execute'",
    )
    config: Dict[str, Any] = Field(
        default_factory=dict,
        description="Matching config: keywords, pattern, fuzzy_match, priority, enabled, ...",
    )

    @field_validator("entry_point")
    @classmethod
    def entry_point_format(cls, v: str) -> str:
        module_name, sep, func_name = v.partition(":")
        if not sep or not module_name or not func_name:
            raise ValueError("entry_point must look like 'module:function'")
        return v
