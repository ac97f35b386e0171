#!/usr/bin/env python3
"""
PDF Report Builder - Main Orchestrator

Coordinates report generation:
1. Compute metric changes (high-variance candidates)
2. Render sections
3. Prepare the embedded snapshot
4. Build PDF

Usage:
    builder = PDFReportBuilder(config)
    pdf_bytes = builder.build()
"""
from __future__ import annotations

import logging
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.platypus import SimpleDocTemplate

from appreport.core.config import AppSettings, load_settings
from appreport.core.pdf_section_registry import RenderContext
from appreport.core.pdf_styles import (
    MARGIN_BOTTOM, MARGIN_LEFT, MARGIN_RIGHT, MARGIN_TOP,
    create_page_template_function,
)
from appreport.models.report_config import ReportConfig
from appreport.pipeline.metrics_computer import compute_metric_changes
from appreport.pipeline.section_renderer import SectionRenderer
from appreport.pipeline.snapshot import create_snapshot_drawer

# Import sections (triggers auto-registration)
import appreport.pdf_sections  # noqa: F401

LOGGER = logging.getLogger(__name__)

FOOTER_TIMESTAMP_FORMAT = "%m/%d/%Y %H:%M"


# ============================================================================
# REPORT BUILDER
# ============================================================================
class PDFReportBuilder:
    """
    Main orchestrator for PDF report generation.

    Attributes:
        config: ReportConfig to render
        settings: AppSettings (defaults from the YAML settings file)
        generated_at: Timestamp printed in the footer
        embed_snapshot: Draw the hidden, machine-readable copy of ``config``

    Example:
        >>> builder = PDFReportBuilder(ReportConfig(company_name="Acme"))
        >>> pdf_bytes = builder.build()
    """

    def __init__(self,
                 config: ReportConfig,
                 settings: Optional[AppSettings] = None,
                 generated_at: Optional[datetime] = None,
                 embed_snapshot: Optional[bool] = None):
        self.config = config
        self.settings = settings or load_settings()
        self.generated_at = generated_at or datetime.now()
        self.embed_snapshot = (self.settings.snapshot_enabled
                               if embed_snapshot is None else embed_snapshot)

        self.story = []
        self.metric_changes = None
        self.snapshot_drawer = None

        LOGGER.info("PDFReportBuilder initialized:")
        LOGGER.info("  Company:  %s", self.company_name)
        LOGGER.info("  Date:     %s", config.formatted_report_date() or "(none)")
        LOGGER.info("  Snapshot: %s", "embedded" if self.embed_snapshot else "off")

    @property
    def company_name(self) -> str:
        return self.config.company_name.strip() or self.settings.default_company

    @property
    def footer_text(self) -> str:
        version = self.config.version or self.settings.report_version
        return (f"Report Version {version} | "
                f"Generated: {self.generated_at.strftime(FOOTER_TIMESTAMP_FORMAT)}")

    # ========================================================================
    # PUBLIC API
    # ========================================================================
    def build(self) -> bytes:
        """
        Execute the generation pipeline and return the PDF bytes.

        Exceptions raised by ReportLab propagate unchanged.
        """
        LOGGER.info("=" * 70)
        LOGGER.info("PDF REPORT GENERATION")
        LOGGER.info("=" * 70)

        LOGGER.info("[1/4] Computing metric changes...")
        self._compute_metrics()

        LOGGER.info("[2/4] Rendering sections...")
        self._render_sections()

        LOGGER.info("[3/4] Preparing snapshot...")
        self._prepare_snapshot()

        LOGGER.info("[4/4] Building PDF...")
        pdf_bytes = self._build_pdf()

        LOGGER.info("Report complete: %.1f KB", len(pdf_bytes) / 1024)
        return pdf_bytes

    # ========================================================================
    # PRIVATE METHODS (Pipeline Stages)
    # ========================================================================
    def _compute_metrics(self):
        self.metric_changes = compute_metric_changes(self.config)
        LOGGER.info("  Metric pairs: %d", len(self.metric_changes))

    def _render_sections(self):
        context = RenderContext(
            config=self.config,
            settings=self.settings,
            generated_at=self.generated_at,
            metric_changes=self.metric_changes,
        )
        self.story = SectionRenderer().render_all(context)

    def _prepare_snapshot(self):
        if self.embed_snapshot:
            self.snapshot_drawer = create_snapshot_drawer(self.config, self.settings)
        else:
            self.snapshot_drawer = None

    def _build_pdf(self) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=MARGIN_LEFT,
            rightMargin=MARGIN_RIGHT,
            topMargin=MARGIN_TOP,
            bottomMargin=MARGIN_BOTTOM,
            title=f"{self.company_name} App Performance Report",
            author=self.config.created_by_name,
            creator=self.settings.report_name,
            invariant=True,
        )

        later_pages = create_page_template_function(
            self.settings.report_name, self.company_name, self.footer_text,
        )
        # the snapshot goes on the first page only
        first_page = create_page_template_function(
            self.settings.report_name, self.company_name, self.footer_text,
            extra=self.snapshot_drawer,
        )

        doc.build(self.story, onFirstPage=first_page, onLaterPages=later_pages)
        return buffer.getvalue()


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================
def generate_pdf(config: ReportConfig,
                 settings: Optional[AppSettings] = None,
                 generated_at: Optional[datetime] = None,
                 embed_snapshot: Optional[bool] = None) -> bytes:
    """
    Render ``config`` to PDF bytes.

    Example:
        >>> pdf_bytes = generate_pdf(ReportConfig(company_name="Acme"))
        >>> pdf_bytes[:5]
        b'%PDF-'
    """
    builder = PDFReportBuilder(config, settings=settings, generated_at=generated_at,
                               embed_snapshot=embed_snapshot)
    return builder.build()


def write_pdf(config: ReportConfig, output_path, **kwargs) -> Path:
    """Render ``config`` and write it to ``output_path`` (parents created)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(generate_pdf(config, **kwargs))
    LOGGER.info("PDF written: %s", output_path)
    return output_path
