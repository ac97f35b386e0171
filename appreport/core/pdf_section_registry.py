#!/usr/bin/env python3
"""
Section registry pattern for modular report building.

Provides:
- Abstract Section base class
- SectionConfig for section metadata
- RenderContext handed to every section
- Global SECTION_REGISTRY for auto-registration
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import pandas as pd
from reportlab.platypus import Flowable

LOGGER = logging.getLogger(__name__)


# ============================================================================
# SECTION CONFIGURATION
# ============================================================================
@dataclass
class SectionConfig:
    """
    Configuration for a report section.

    Attributes:
        name: Unique section identifier (e.g., "ios_metrics")
        title: Heading printed at the top of the section
        enabled: Whether section is part of the report layout at all
        order: Sort order (lower = earlier in report)
        toggle: ReportConfig boolean that switches the section on/off per report
        page_break_before: Insert page break before section
        page_break_after: Insert page break after section
    """
    name: str
    title: str
    enabled: bool = True
    order: int = 100
    toggle: Optional[str] = None
    page_break_before: bool = False
    page_break_after: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if not self.name:
            raise ValueError("Section name cannot be empty")
        if self.order < 0:
            raise ValueError("Section order must be non-negative")


# ============================================================================
# RENDER CONTEXT
# ============================================================================
@dataclass
class RenderContext:
    """
    Context passed to section render() methods.

    Attributes:
        config: ReportConfig being rendered
        settings: AppSettings (report name, data sources text, ...)
        generated_at: Timestamp printed in the footer
        metric_changes: Long-format DataFrame of every metric pair
            (see pipeline.metrics_computer)
    """
    config: Any
    settings: Any
    generated_at: datetime
    metric_changes: pd.DataFrame = field(default_factory=pd.DataFrame)


# ============================================================================
# ABSTRACT SECTION
# ============================================================================
class Section(ABC):
    """
    Abstract base class for report sections.

    Each section is responsible for:
    1. Rendering its content as ReportLab Flowables
    2. Deciding whether it applies to the current report (validate)

    Subclasses implement render().
    """

    def __init__(self, config: SectionConfig):
        self.config = config
        self.logger = logging.getLogger(f"{__name__}.{config.name}")

    @abstractmethod
    def render(self, context: RenderContext) -> List[Flowable]:
        """
        Render section content.

        Args:
            context: Rendering context

        Returns:
            List of ReportLab Flowables; an empty list omits the section
        """

    def validate(self, context: RenderContext) -> bool:
        """
        True if the section belongs in this report.

        The default checks the ReportConfig toggle named in SectionConfig.
        """
        if self.config.toggle is None:
            return True
        return bool(getattr(context.config, self.config.toggle))

    def __repr__(self) -> str:
        return (f"Section(name='{self.config.name}', enabled={self.config.enabled}, "
                f"order={self.config.order})")


# ============================================================================
# SECTION REGISTRY
# ============================================================================
class SectionRegistry:
    """
    Registry for report sections.

    Sections auto-register on module import via:
        SECTION_REGISTRY.register(MySection(SectionConfig(...)))
    """

    def __init__(self):
        self._sections: Dict[str, Section] = {}
        self.logger = logging.getLogger(__name__)

    def register(self, section: Section) -> None:
        """
        Register a section.

        Raises:
            ValueError: If section name already registered
        """
        name = section.config.name
        if name in self._sections:
            raise ValueError(f"Section '{name}' already registered")

        self._sections[name] = section
        self.logger.debug("Registered section: %s", name)

    def unregister(self, name: str) -> None:
        if name in self._sections:
            del self._sections[name]
            self.logger.debug("Unregistered section: %s", name)

    def get(self, name: str) -> Optional[Section]:
        return self._sections.get(name)

    def get_enabled_sections(self) -> List[Section]:
        """Enabled sections sorted by config.order."""
        sections = [s for s in self._sections.values() if s.config.enabled]
        return sorted(sections, key=lambda s: s.config.order)

    def list_all(self) -> List[str]:
        return list(self._sections.keys())

    def __len__(self) -> int:
        return len(self._sections)

    def __contains__(self, name: str) -> bool:
        return name in self._sections


# ============================================================================
# GLOBAL REGISTRY INSTANCE
# ============================================================================
SECTION_REGISTRY = SectionRegistry()
