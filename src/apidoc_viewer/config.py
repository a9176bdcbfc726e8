"""Configuration models for the document viewer."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field


class ShowConfig(BaseModel):
    """Toggles which document sections get rendered."""

    sidebar: bool = False
    info: bool = True
    servers: bool = True
    operations: bool = True
    messages: bool = True
    schemas: bool = True
    errors: bool = True


class ExpandConfig(BaseModel):
    message_examples: bool = False


class SidebarConfig(BaseModel):
    show_servers: Literal["byDefault", "bySpecTags", "byServersTags"] = "byDefault"
    show_operations: Literal["byDefault", "bySpecTags", "byOperationsTags"] = "byDefault"


class ExtensionsConfig(BaseModel):
    """Maps specification extension names to renderer identifiers."""

    renderers: dict[str, str] = Field(default_factory=lambda: {"x-x": "default"})


class NavigationConfig(BaseModel):
    """Controls how the viewer brings changed sections into view."""

    enabled: bool = True
    behavior: Literal["smooth", "auto", "instant"] = "smooth"
    block: Literal["start", "center", "end", "nearest"] = "start"


class LoggingConfig(BaseModel):
    level: Literal["debug", "info", "warning", "error"] = "info"
    format: Literal["console", "json"] = "console"


class ViewerConfig(BaseModel):
    """Top-level viewer configuration."""

    show: ShowConfig = Field(default_factory=ShowConfig)
    expand: ExpandConfig = Field(default_factory=ExpandConfig)
    sidebar: SidebarConfig = Field(default_factory=SidebarConfig)
    extensions: ExtensionsConfig = Field(default_factory=ExtensionsConfig)
    navigation: NavigationConfig = Field(default_factory=NavigationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def merged(cls, partial: Mapping[str, Any] | None = None) -> "ViewerConfig":
        """Overlay a partial config on the defaults, one level deep per group.

        Group values are merged key by key, so `{"show": {"servers": False}}`
        keeps every other `show` toggle at its default.
        """

        defaults = cls().model_dump()
        if not partial:
            return cls.model_validate(defaults)

        merged: dict[str, Any] = dict(defaults)
        for key, value in partial.items():
            base = defaults.get(key)
            if isinstance(base, dict) and isinstance(value, Mapping):
                merged[key] = {**base, **value}
            elif value is not None:
                merged[key] = value
        return cls.model_validate(merged)
