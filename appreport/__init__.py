"""
appreport - mobile app store performance reports.

Two entry points:

* ``generate_pdf(config) -> bytes`` renders a ReportConfig to PDF, with the
  report data embedded so it can be read back.
* ``parse_report(pdf_bytes) -> ReportConfig`` recovers that data (or as much
  of it as the visible layout allows) and rolls it forward to the next
  period; ``load_report`` returns it unchanged.
"""

__version__ = "1.4.0"

from .models import ReportConfig, export_config, import_config
from .pdf_report_builder import PDFReportBuilder, generate_pdf, write_pdf
from .pipeline import load_report, parse_report, rollover_config

__all__ = [
    'PDFReportBuilder',
    'ReportConfig',
    'export_config',
    'generate_pdf',
    'import_config',
    'load_report',
    'parse_report',
    'rollover_config',
    'write_pdf',
]
