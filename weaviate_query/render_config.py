"""
@file: render_config.py
Renderer defaults shared by the query and aggregate renderers.

Configuration:
    - RENDERING.TOP_OCCURRENCES_LIMIT: Default result count for topOccurrences (default: 5)
    - RENDERING.DEFAULT_CONSISTENCY_LEVEL: Consistency level used when a query sets none (default: none)
    - RENDERING.INDENT: Indentation width of rendered documents (default: 2)
"""
from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import ConfigurationError

CONSISTENCY_LEVELS = ("ONE", "QUORUM", "ALL")


@dataclass(frozen=True)
class RendererConfig:
    top_occurrences_limit: int = 5
    default_consistency_level: Optional[str] = None
    indent: int = 2

    def __post_init__(self):
        if isinstance(self.top_occurrences_limit, bool) or not isinstance(self.top_occurrences_limit, int) \
                or self.top_occurrences_limit < 1:
            raise ConfigurationError(f"TOP_OCCURRENCES_LIMIT must be a positive integer, got {self.top_occurrences_limit!r}")
        if self.default_consistency_level is not None and self.default_consistency_level not in CONSISTENCY_LEVELS:
            raise ConfigurationError(
                f"DEFAULT_CONSISTENCY_LEVEL must be one of {CONSISTENCY_LEVELS}, got {self.default_consistency_level!r}"
            )
        if isinstance(self.indent, bool) or not isinstance(self.indent, int) or self.indent < 0:
            raise ConfigurationError(f"INDENT must be a non-negative integer, got {self.indent!r}")

    @property
    def indent_unit(self) -> str:
        return " " * self.indent

    @classmethod
    def from_config(cls, config: Any) -> "RendererConfig":
        """Build renderer defaults from the RENDERING section of a Config."""
        section = config.get_nested('RENDERING', {}) or {}
        return cls(
            top_occurrences_limit=section.get('TOP_OCCURRENCES_LIMIT', 5),
            default_consistency_level=section.get('DEFAULT_CONSISTENCY_LEVEL'),
            indent=section.get('INDENT', 2),
        )


DEFAULT_RENDERER_CONFIG = RendererConfig()
