"""PDF output formatter using reportlab.

Renders a ``PrintDocument`` block by block, applying the same style tokens
the dashboard and the print markup use.  Requires the ``reportlab``
dependency.
"""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any, Callable

from reportlab.lib import colors as rl_colors
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Flowable, SimpleDocTemplate, Spacer, Table, TableStyle
from reportlab.platypus import Paragraph as _RawParagraph

from sonicscribe.core.config import PDFFormattingConfig
from sonicscribe.projectors.document import (
    AdmissionWarningBlock,
    Block,
    BulletListBlock,
    DisclaimerBlock,
    FooterBlock,
    HeaderBlock,
    HeadingBlock,
    KeyValueBlock,
    PrintDocument,
    TagListBlock,
)
from sonicscribe.styles import (
    APP_NAME_COLOR,
    DISCLAIMER_BG_COLOR,
    DISCLAIMER_BORDER_COLOR,
    DISCLAIMER_TEXT_COLOR,
    DISCLAIMER_TITLE_COLOR,
    HEADER_RULE_COLOR,
    INFO_ITEM_BG_COLOR,
    INFO_ITEM_BORDER_COLOR,
    LABEL_TEXT_COLOR,
    MUTED_TEXT_COLOR,
    SECTION_RULE_COLOR,
    TAG_BG_COLOR,
    TAG_BORDER_COLOR,
    TAG_TEXT_COLOR,
)

# ── Text sanitization ────────────────────────────────────────────────
# The base-14 fonts lack glyphs for some characters the upstream model likes
# to emit, and Paragraph treats ``<`` and ``&`` as markup.

_UNICODE_REPLACEMENTS: dict[str, str] = {
    "\u2011": "-",       # non-breaking hyphen
    "\u2013": "-",       # en-dash
    "\u2014": "-",       # em-dash
    "\u00a0": " ",       # non-breaking space
    "\u202f": " ",       # narrow no-break space
    "\u2018": "'",       # left single quote
    "\u2019": "'",       # right single quote
    "\u201c": '"',       # left double quote
    "\u201d": '"',       # right double quote
    "\u2026": "...",     # ellipsis
    "\u2022": "-",       # bullet
    "\u26a0": "!",       # warning sign
}


def _sanitize_text(text: str) -> str:
    for char, replacement in _UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def Paragraph(text: str, *args: Any, **kwargs: Any) -> _RawParagraph:  # noqa: N802
    """Sanitized Paragraph wrapper; *text* may contain reportlab markup."""
    return _RawParagraph(_sanitize_text(str(text)), *args, **kwargs)


def _text(value: str) -> str:
    """Escape report content for a Paragraph and keep its line breaks."""
    return _escape(_sanitize_text(value)).replace("\n", "<br/>")


_PAGE_SIZES = {"letter": LETTER, "a4": A4}


def _hex(color_str: str) -> HexColor:
    return HexColor(color_str)


# ── PDFFormatter ─────────────────────────────────────────────────────


class PDFFormatter:
    """Renders a ``PrintDocument`` as a PDF for archival capture."""

    def __init__(self, config: PDFFormattingConfig | None = None) -> None:
        self._config = config or PDFFormattingConfig()
        self._page_size: tuple[float, float] = _PAGE_SIZES.get(self._config.page_size, A4)
        self._margin: float = self._config.margin_inches * inch
        self._styles = self._build_styles()
        self._builders: dict[str, Callable[[Any], list[Flowable]]] = {
            HeaderBlock.kind: self._build_header,
            HeadingBlock.kind: self._build_heading,
            KeyValueBlock.kind: self._build_key_value,
            BulletListBlock.kind: self._build_bullet_list,
            TagListBlock.kind: self._build_tag_list,
            AdmissionWarningBlock.kind: self._build_admission_warning,
            DisclaimerBlock.kind: self._build_disclaimer,
            FooterBlock.kind: self._build_footer,
        }

    # ── Public API ───────────────────────────────────────────────────

    def format(self, subject: PrintDocument, **kwargs: Any) -> bytes:
        """Render *subject* to PDF bytes."""
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=self._page_size,
            leftMargin=self._margin,
            rightMargin=self._margin,
            topMargin=self._margin,
            bottomMargin=self._margin + 0.2 * inch,
            title=subject.title,
            author=subject.app_name,
        )
        story = self._build_story(subject.blocks)
        doc.build(
            story,
            onFirstPage=self._page_footer(subject.app_name),
            onLaterPages=self._page_footer(subject.app_name),
        )
        return buffer.getvalue()

    def format_to_file(self, subject: PrintDocument, path: Path, **kwargs: Any) -> Path:
        """Write PDF to *path* and return it."""
        path.write_bytes(self.format(subject, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "application/pdf"

    # ── Style setup ──────────────────────────────────────────────────

    def _build_styles(self) -> dict[str, ParagraphStyle]:
        base = getSampleStyleSheet()
        font = self._config.font_family
        body_sz = self._config.body_font_size
        heading_sz = self._config.heading_font_size

        return {
            "app_name": ParagraphStyle(
                "app_name",
                parent=base["Title"],
                fontName=f"{font}-Bold",
                fontSize=heading_sz + 8,
                leading=(heading_sz + 8) * 1.2,
                alignment=TA_CENTER,
                textColor=_hex(APP_NAME_COLOR),
                spaceAfter=4,
            ),
            "report_title": ParagraphStyle(
                "report_title",
                parent=base["BodyText"],
                fontName=font,
                fontSize=heading_sz + 2,
                leading=(heading_sz + 2) * 1.3,
                alignment=TA_CENTER,
                textColor=_hex(LABEL_TEXT_COLOR),
                spaceAfter=4,
            ),
            "center_muted": ParagraphStyle(
                "center_muted",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                alignment=TA_CENTER,
                textColor=_hex(MUTED_TEXT_COLOR),
            ),
            "heading": ParagraphStyle(
                "heading",
                parent=base["Heading2"],
                fontName=f"{font}-Bold",
                fontSize=heading_sz,
                leading=heading_sz * 1.3,
                spaceBefore=14,
                spaceAfter=6,
            ),
            "label": ParagraphStyle(
                "label",
                parent=base["BodyText"],
                fontName=f"{font}-Bold",
                fontSize=body_sz,
                textColor=_hex(LABEL_TEXT_COLOR),
            ),
            "body": ParagraphStyle(
                "body",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                leading=body_sz * 1.4,
            ),
            "bullet": ParagraphStyle(
                "bullet",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                leading=body_sz * 1.4,
                leftIndent=12,
            ),
            "banner": ParagraphStyle(
                "banner",
                parent=base["BodyText"],
                fontName=f"{font}-Bold",
                fontSize=body_sz + 1,
                alignment=TA_CENTER,
            ),
            "disclaimer_title": ParagraphStyle(
                "disclaimer_title",
                parent=base["BodyText"],
                fontName=f"{font}-Bold",
                fontSize=body_sz + 2,
                alignment=TA_CENTER,
                textColor=_hex(DISCLAIMER_TITLE_COLOR),
                spaceAfter=4,
            ),
            "disclaimer_text": ParagraphStyle(
                "disclaimer_text",
                parent=base["BodyText"],
                fontName=font,
                fontSize=body_sz,
                alignment=TA_CENTER,
                textColor=_hex(DISCLAIMER_TEXT_COLOR),
            ),
        }

    # ── Story construction ───────────────────────────────────────────

    def _build_story(self, blocks: tuple[Block, ...]) -> list[Flowable]:
        story: list[Flowable] = []
        for block in blocks:
            story.extend(self._builders[block.kind](block))
        return story

    def _build_header(self, block: HeaderBlock) -> list[Flowable]:
        rule = Table([[""]], colWidths=[self._content_width()], rowHeights=[2])
        rule.setStyle(TableStyle([("LINEBELOW", (0, 0), (-1, -1), 2, _hex(HEADER_RULE_COLOR))]))
        return [
            Paragraph(_text(block.app_name), self._styles["app_name"]),
            Paragraph(_text(block.title), self._styles["report_title"]),
            Paragraph(f"Generated on {_text(block.generated_on)}", self._styles["center_muted"]),
            Spacer(1, 8),
            rule,
            Spacer(1, 12),
        ]

    def _build_heading(self, block: HeadingBlock) -> list[Flowable]:
        heading = Table(
            [[Paragraph(_text(block.text), self._styles["heading"])]],
            colWidths=[self._content_width()],
        )
        heading.setStyle(
            TableStyle(
                [
                    ("LINEBELOW", (0, 0), (-1, -1), 1.5, _hex(SECTION_RULE_COLOR)),
                    ("LEFTPADDING", (0, 0), (-1, -1), 0),
                ]
            )
        )
        return [heading, Spacer(1, 6)]

    def _build_key_value(self, block: KeyValueBlock) -> list[Flowable]:
        value = _text(block.value)
        if block.style is not None:
            value = f'<font color="{block.style.print_text}"><b>{value}</b></font>'
        rows: list[list[Any]] = [
            [Paragraph(_text(block.label), self._styles["label"])],
            [Paragraph(value, self._styles["body"])],
        ]
        if block.meter is not None:
            rows.append([self._meter(block)])

        background = block.style.print_bg if block.style is not None else INFO_ITEM_BG_COLOR
        border = block.style.print_border if block.style is not None else INFO_ITEM_BORDER_COLOR
        box = Table(rows, colWidths=[self._content_width()])
        box.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, -1), _hex(background)),
                    ("LINEBEFORE", (0, 0), (0, -1), 4, _hex(border)),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                    ("LEFTPADDING", (0, 0), (-1, -1), 10),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 10),
                ]
            )
        )
        return [box, Spacer(1, 6)]

    def _meter(self, block: KeyValueBlock) -> Table:
        """Horizontal bar filled to ``block.meter`` percent."""
        width = self._content_width() - 20
        filled = max(min(block.meter or 0, 100), 0) / 100 * width
        fill_color = block.style.print_border if block.style is not None else INFO_ITEM_BORDER_COLOR
        bar = Table([["", ""]], colWidths=[max(filled, 0.1), max(width - filled, 0.1)], rowHeights=[6])
        bar.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (0, 0), _hex(fill_color)),
                    ("BACKGROUND", (1, 0), (1, 0), _hex("#E5E7EB")),
                    ("TOPPADDING", (0, 0), (-1, -1), 0),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 0),
                ]
            )
        )
        return bar

    def _build_bullet_list(self, block: BulletListBlock) -> list[Flowable]:
        items: list[Flowable] = []
        if block.label:
            items.append(Paragraph(_text(block.label), self._styles["label"]))
        bullets = [Paragraph(f"- {_text(item)}", self._styles["bullet"]) for item in block.items]
        columns = max(block.columns, 1)
        rows = [bullets[i:i + columns] for i in range(0, len(bullets), columns)]
        if rows and len(rows[-1]) < columns:
            rows[-1] = rows[-1] + [""] * (columns - len(rows[-1]))
        table = Table(rows, colWidths=[self._content_width() / columns] * columns)
        table.setStyle(
            TableStyle(
                [
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("TOPPADDING", (0, 0), (-1, -1), 2),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 2),
                ]
            )
        )
        items.extend([table, Spacer(1, 6)])
        return items

    def _build_tag_list(self, block: TagListBlock) -> list[Flowable]:
        tags = ", ".join(f'<font color="{TAG_TEXT_COLOR}">{_text(item)}</font>' for item in block.items)
        box = Table([[Paragraph(tags, self._styles["body"])]], colWidths=[self._content_width()])
        box.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, -1), _hex(TAG_BG_COLOR)),
                    ("BOX", (0, 0), (-1, -1), 1, _hex(TAG_BORDER_COLOR)),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                ]
            )
        )
        return [box, Spacer(1, 6)]

    def _build_admission_warning(self, block: AdmissionWarningBlock) -> list[Flowable]:
        text = f'<font color="{block.style.print_text}">! {_text(block.text)}</font>'
        box = Table([[Paragraph(text, self._styles["banner"])]], colWidths=[self._content_width()])
        box.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, -1), _hex(block.style.print_bg)),
                    ("BOX", (0, 0), (-1, -1), 2, _hex(block.style.print_border)),
                    ("TOPPADDING", (0, 0), (-1, -1), 10),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 10),
                ]
            )
        )
        return [box, Spacer(1, 8)]

    def _build_disclaimer(self, block: DisclaimerBlock) -> list[Flowable]:
        box = Table(
            [
                [Paragraph(f"! {_text(block.title)}", self._styles["disclaimer_title"])],
                [Paragraph(_text(block.text), self._styles["disclaimer_text"])],
            ],
            colWidths=[self._content_width()],
        )
        box.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, -1), _hex(DISCLAIMER_BG_COLOR)),
                    ("BOX", (0, 0), (-1, -1), 2, _hex(DISCLAIMER_BORDER_COLOR)),
                    ("TOPPADDING", (0, 0), (-1, -1), 8),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
                    ("LEFTPADDING", (0, 0), (-1, -1), 12),
                    ("RIGHTPADDING", (0, 0), (-1, -1), 12),
                ]
            )
        )
        return [Spacer(1, 12), box]

    def _build_footer(self, block: FooterBlock) -> list[Flowable]:
        items: list[Flowable] = [Spacer(1, 18)]
        for line in block.lines:
            items.append(Paragraph(_text(line), self._styles["center_muted"]))
        return items

    # ── Page decoration ──────────────────────────────────────────────

    def _page_footer(self, app_name: str) -> Callable[[Any, Any], None]:
        def draw(canvas: Any, doc: Any) -> None:
            canvas.saveState()
            width, _ = self._page_size
            canvas.setFont(self._config.font_family, 8)
            canvas.setFillColor(rl_colors.grey)
            canvas.drawString(self._margin, self._margin - 4, f"Page {canvas.getPageNumber()}")
            canvas.drawRightString(width - self._margin, self._margin - 4, _sanitize_text(app_name))
            canvas.restoreState()

        return draw

    def _content_width(self) -> float:
        return float(self._page_size[0]) - 2 * self._margin
