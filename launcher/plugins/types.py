"""Plugin data contracts - plugins, matching config, match results, execution context."""

from dataclasses import dataclass, field
from enum import Enum
from re import Pattern
from typing import Any, Awaitable, Callable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_PRIORITY = 50

Platform = Literal["mac", "windows", "linux"]


class PluginConfig(BaseModel):
    """Matching and behaviour configuration for a plugin."""

    model_config = ConfigDict(validate_assignment=True)

    # Matching rules
    keywords: List[str] = Field(default_factory=list, description="Trigger words, e.g. ['translate', 'fy']")
    pattern: Optional[Pattern] = Field(default=None, description="Regex searched in the trimmed query")
    fuzzy_match: bool = Field(default=False, description="Score the query against the plugin name")
    file_types: List[str] = Field(default_factory=list, description="Supported file extensions, e.g. ['.png']")

    # Behaviour
    priority: Optional[int] = Field(default=None, ge=0, le=100, description="Tie-breaker (0-100), 50 when unset")
    enabled: bool = Field(default=True, description="Disabled plugins stay registered but never match")
    featured: bool = False

    permissions: List[str] = Field(default_factory=list, description="e.g. ['clipboard', 'network']")

    @property
    def effective_priority(self) -> int:
        return DEFAULT_PRIORITY if self.priority is None else self.priority

    def to_dict(self) -> dict:
        return {
            "keywords": list(self.keywords),
            "pattern": self.pattern.pattern if self.pattern is not None else None,
            "fuzzy_match": self.fuzzy_match,
            "file_types": list(self.file_types),
            "priority": self.priority,
            "enabled": self.enabled,
            "featured": self.featured,
            "permissions": list(self.permissions),
        }


@dataclass
class PluginAction:
    """An action offered alongside a plugin result."""

    name: str
    handler: Callable[[], Any]
    shortcut: Optional[str] = None


@dataclass
class PluginResult:
    """Structured result a plugin hands to the host for display."""

    type: Literal["text", "html", "list", "custom"] = "text"
    content: Any = None
    actions: List[PluginAction] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "content": self.content,
            "actions": [{"name": a.name, "shortcut": a.shortcut} for a in self.actions],
        }


@dataclass
class PluginContext:
    """Execution environment passed to ``Plugin.execute``.

    Built by the host when a match is committed; the registry and matcher
    never construct or inspect it.
    """

    input: str  # extracted payload (keyword stripped)
    raw_input: str
    platform: Platform

    show_notification: Callable[[str], None]
    copy_to_clipboard: Callable[[str], Awaitable[None]]
    open_url: Callable[[str], Awaitable[None]]
    hide_window: Callable[[], Awaitable[None]]
    show_result: Callable[[PluginResult], None]

    clipboard: Optional[str] = None
    selection: Optional[str] = None


ExecuteFn = Callable[[PluginContext], Union[None, Awaitable[None]]]
HookFn = Callable[[], Union[None, Awaitable[None]]]
PreviewFn = Callable[[str], str]


class Plugin:
    """A launcher plugin.

    Either construct one directly::

        Plugin(id="translate", name="Translate", execute=run, config={"keywords": ["fy"]})

    or subclass and define ``execute`` (and optionally ``on_load``,
    ``on_unload``, ``get_preview``) as methods. Hooks that are not provided
    stay ``None``.
    """

    id: str = ""
    name: str = ""
    description: str = ""
    version: str = "1.0.0"
    author: str = ""
    config: Optional[PluginConfig] = None

    execute: Optional[ExecuteFn] = None
    on_load: Optional[HookFn] = None
    on_unload: Optional[HookFn] = None
    get_preview: Optional[PreviewFn] = None

    def __init__(
        self,
        id: Optional[str] = None,
        name: Optional[str] = None,
        execute: Optional[ExecuteFn] = None,
        config: Union[PluginConfig, dict, None] = None,
        *,
        description: Optional[str] = None,
        version: Optional[str] = None,
        author: Optional[str] = None,
        on_load: Optional[HookFn] = None,
        on_unload: Optional[HookFn] = None,
        get_preview: Optional[PreviewFn] = None,
    ):
        # Only set what was passed so subclass attributes and methods survive
        if id is not None:
            self.id = id
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if version is not None:
            self.version = version
        if author is not None:
            self.author = author
        if execute is not None:
            self.execute = execute
        if on_load is not None:
            self.on_load = on_load
        if on_unload is not None:
            self.on_unload = on_unload
        if get_preview is not None:
            self.get_preview = get_preview

        if isinstance(config, dict):
            config = PluginConfig(**config)
        if config is not None:
            self.config = config
        elif isinstance(type(self).config, dict):
            self.config = PluginConfig(**type(self).config)
        elif type(self).config is not None:
            # Never share a class-level config between instances
            self.config = type(self).config.model_copy(deep=True)

    @property
    def has_load_hook(self) -> bool:
        return self.on_load is not None

    @property
    def has_unload_hook(self) -> bool:
        return self.on_unload is not None

    def preview(self, input: str) -> Optional[str]:
        """Return preview text for the given payload, if the plugin offers one."""
        if self.get_preview is None:
            return None
        return self.get_preview(input)

    def to_dict(self) -> dict:
        """Serialize plugin to dict for API responses."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "author": self.author,
            "config": self.config.to_dict() if self.config is not None else None,
        }

    def __str__(self):
        return f"Plugin({self.id})"

    def __repr__(self):
        return self.__str__()


class MatchType(str, Enum):
    """Strategy that produced a match."""

    KEYWORD = "keyword"
    REGEX = "regex"
    FUZZY = "fuzzy"
    # Reserved, never produced by PluginMatcher
    FILE_TYPE = "fileType"
    ALWAYS = "always"


@dataclass(frozen=True)
class MatchResult:
    """One ranked outcome of matching a query against a plugin."""

    plugin: Plugin
    score: int  # 0-100
    extracted_input: str
    match_type: MatchType

    def to_dict(self) -> dict:
        return {
            "plugin_id": self.plugin.id,
            "plugin_name": self.plugin.name,
            "score": self.score,
            "extracted_input": self.extracted_input,
            "match_type": self.match_type.value,
        }
