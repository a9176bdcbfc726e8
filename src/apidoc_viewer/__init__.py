"""API document viewer package."""

from .config import ViewerConfig
from .types import ChangedSection, ChangeRecord, SectionType

__all__ = ["ChangeRecord", "ChangedSection", "SectionType", "ViewerConfig"]
