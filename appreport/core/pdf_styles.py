#!/usr/bin/env python3
"""
PDF styles and page templates.

Defines:
- Page geometry
- Color palette
- ParagraphStyle definitions
- Running header/footer drawn on every page
"""
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

# ============================================================================
# PAGE DIMENSIONS
# ============================================================================
PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN_LEFT = 1.5 * cm
MARGIN_RIGHT = 1.5 * cm
MARGIN_TOP = 2.5 * cm
MARGIN_BOTTOM = 2.0 * cm

CONTENT_WIDTH = PAGE_WIDTH - MARGIN_LEFT - MARGIN_RIGHT
CONTENT_HEIGHT = PAGE_HEIGHT - MARGIN_TOP - MARGIN_BOTTOM

# Baseline of the footer text; anything drawn lower sits on its own line.
FOOTER_BASELINE = MARGIN_BOTTOM - 0.8 * cm

# ============================================================================
# COLOR PALETTE
# ============================================================================
COLORS = {
    # Change direction
    'increase': HexColor('#2e7d32'),
    'decrease': HexColor('#c62828'),

    # UI colors
    'primary': HexColor('#1e88e5'),
    'header_bg': HexColor('#1565c0'),
    'header_text': HexColor('#ffffff'),
    'row_even': HexColor('#ffffff'),
    'row_odd': HexColor('#eeeeee'),
    'bar': HexColor('#42a5f5'),
    'bar_track': HexColor('#e3f2fd'),
    'secondary': HexColor('#7f8c8d'),
    'border': HexColor('#bdc3c7'),
    'text_dark': HexColor('#2c3e50'),
    'text_light': HexColor('#95a5a6'),
    'page_background': HexColor('#ffffff'),
}

# ============================================================================
# FONT DEFINITIONS
# ============================================================================
FONT_TITLE = 'Helvetica-Bold'
FONT_HEADING = 'Helvetica-Bold'
FONT_BODY = 'Helvetica'
FONT_MONO = 'Courier'

# ============================================================================
# PARAGRAPH STYLES
# ============================================================================
base_styles = getSampleStyleSheet()

# Report title ("<Company> App Performance Report")
style_title = ParagraphStyle(
    'ReportTitle',
    parent=base_styles['Title'],
    fontName=FONT_TITLE,
    fontSize=22,
    leading=26,
    textColor=COLORS['text_dark'],
    spaceAfter=0.3 * cm,
    alignment=TA_LEFT,
)

# Date / author line
style_subtitle = ParagraphStyle(
    'ReportSubtitle',
    parent=base_styles['Normal'],
    fontName=FONT_BODY,
    fontSize=12,
    leading=15,
    textColor=COLORS['secondary'],
    spaceAfter=0.5 * cm,
    alignment=TA_LEFT,
)

# Section titles
style_h1 = ParagraphStyle(
    'Heading1',
    parent=base_styles['Heading1'],
    fontName=FONT_HEADING,
    fontSize=16,
    leading=20,
    textColor=COLORS['primary'],
    spaceBefore=0.6 * cm,
    spaceAfter=0.3 * cm,
    alignment=TA_LEFT,
)

# Subsection titles
style_h2 = ParagraphStyle(
    'Heading2',
    parent=base_styles['Heading2'],
    fontName=FONT_HEADING,
    fontSize=12,
    leading=15,
    textColor=COLORS['text_dark'],
    spaceBefore=0.4 * cm,
    spaceAfter=0.2 * cm,
    alignment=TA_LEFT,
)

style_body = ParagraphStyle(
    'Body',
    parent=base_styles['Normal'],
    fontName=FONT_BODY,
    fontSize=10,
    textColor=COLORS['text_dark'],
    leading=15,
    spaceAfter=0.3 * cm,
)

# Key/value lines in the technical specifications
style_spec_line = ParagraphStyle(
    'SpecLine',
    parent=style_body,
    spaceAfter=0.1 * cm,
)

style_caption = ParagraphStyle(
    'Caption',
    parent=base_styles['Normal'],
    fontName=FONT_BODY,
    fontSize=8,
    textColor=COLORS['secondary'],
    spaceBefore=0.1 * cm,
    spaceAfter=0.3 * cm,
    alignment=TA_LEFT,
)


# ============================================================================
# PAGE TEMPLATE
# ============================================================================
def create_header_footer(canvas_obj: canvas.Canvas, doc, report_name: str,
                         company_name: str, footer_text: str):
    """
    Draw the running header and footer.

    Args:
        canvas_obj: ReportLab canvas
        doc: Document object (provides the page number)
        report_name: Text on the left of the header
        company_name: Text on the right of the header
        footer_text: Version / generation line above the page number
    """
    canvas_obj.saveState()

    canvas_obj.setStrokeColor(COLORS['border'])
    canvas_obj.setLineWidth(0.5)
    canvas_obj.line(
        MARGIN_LEFT,
        PAGE_HEIGHT - MARGIN_TOP + 0.5 * cm,
        PAGE_WIDTH - MARGIN_RIGHT,
        PAGE_HEIGHT - MARGIN_TOP + 0.5 * cm
    )

    canvas_obj.setFont(FONT_BODY, 9)
    canvas_obj.setFillColor(COLORS['secondary'])
    canvas_obj.drawString(
        MARGIN_LEFT,
        PAGE_HEIGHT - MARGIN_TOP + 0.7 * cm,
        report_name
    )
    canvas_obj.drawRightString(
        PAGE_WIDTH - MARGIN_RIGHT,
        PAGE_HEIGHT - MARGIN_TOP + 0.7 * cm,
        company_name
    )

    canvas_obj.line(
        MARGIN_LEFT,
        MARGIN_BOTTOM - 0.5 * cm,
        PAGE_WIDTH - MARGIN_RIGHT,
        MARGIN_BOTTOM - 0.5 * cm
    )

    canvas_obj.setFont(FONT_BODY, 8)
    canvas_obj.drawString(MARGIN_LEFT, FOOTER_BASELINE, footer_text)
    canvas_obj.drawRightString(
        PAGE_WIDTH - MARGIN_RIGHT,
        FOOTER_BASELINE,
        f"Page {doc.page}"
    )

    canvas_obj.restoreState()


def create_page_template_function(report_name: str, company_name: str,
                                  footer_text: str, extra=None):
    """
    Create a page callback for ``onFirstPage``/``onLaterPages``.

    Args:
        report_name: Header text (left)
        company_name: Header text (right)
        footer_text: Footer text (left)
        extra: Optional ``extra(canvas_obj, doc)`` drawn after header/footer

    Returns:
        Callable for onFirstPage/onLaterPages
    """

    def _template(canvas_obj, doc):
        create_header_footer(canvas_obj, doc, report_name, company_name, footer_text)
        if extra is not None:
            extra(canvas_obj, doc)

    return _template
