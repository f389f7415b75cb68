"""Print markup formatter: a self-contained HTML document for the print path.

All styling is inlined in a single ``<style>`` element and every value from
the report is HTML-escaped, so the markup can be written into a blank print
window (or handed to an HTML-to-PDF service) with no external assets.
"""

from __future__ import annotations

from html import escape
from pathlib import Path
from typing import Any, Callable

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
    ADMISSION_STYLE,
    APP_NAME_COLOR,
    BODY_TEXT_COLOR,
    DISCLAIMER_BG_COLOR,
    DISCLAIMER_BORDER_COLOR,
    DISCLAIMER_TEXT_COLOR,
    DISCLAIMER_TITLE_COLOR,
    HEADER_RULE_COLOR,
    INFO_ITEM_BG_COLOR,
    INFO_ITEM_BORDER_COLOR,
    LABEL_TEXT_COLOR,
    MUTED_TEXT_COLOR,
    PAGE_BG_COLOR,
    RISK_STYLES,
    SECTION_RULE_COLOR,
    TAG_BG_COLOR,
    TAG_BORDER_COLOR,
    TAG_TEXT_COLOR,
    TRIAGE_STYLES,
    StyleToken,
)

_AUTO_PRINT_SCRIPT = (
    "<script>window.addEventListener('load', function () "
    "{ window.print(); window.close(); });</script>"
)

_BASE_CSS = f"""
@page {{ margin: 0.75in; size: A4; }}
body {{ margin: 0; padding: 20px; font-family: Arial, sans-serif; background: {PAGE_BG_COLOR};
  color: {BODY_TEXT_COLOR}; font-size: 12px; line-height: 1.5; }}
.header {{ text-align: center; border-bottom: 3px solid {HEADER_RULE_COLOR}; padding-bottom: 20px;
  margin-bottom: 30px; page-break-after: avoid; }}
.app-name {{ font-size: 28px; font-weight: bold; color: {APP_NAME_COLOR}; margin-bottom: 5px; }}
.report-title {{ font-size: 20px; color: {LABEL_TEXT_COLOR}; margin-bottom: 10px; }}
.report-date {{ font-size: 14px; color: {MUTED_TEXT_COLOR}; }}
.section {{ margin-bottom: 25px; page-break-inside: avoid; }}
.section-title {{ font-size: 18px; font-weight: bold; color: #1f2937; margin-bottom: 10px;
  padding-bottom: 5px; border-bottom: 2px solid {SECTION_RULE_COLOR}; page-break-after: avoid; }}
.info-item {{ background: {INFO_ITEM_BG_COLOR}; padding: 15px; border-radius: 8px; margin-bottom: 10px;
  border-left: 4px solid {INFO_ITEM_BORDER_COLOR}; break-inside: avoid; }}
.info-label {{ font-weight: bold; color: {LABEL_TEXT_COLOR}; margin-bottom: 5px; }}
.info-value {{ color: #1f2937; white-space: pre-wrap; }}
.list-label {{ font-weight: bold; margin-bottom: 6px; }}
.list-item {{ background: {INFO_ITEM_BG_COLOR}; padding: 10px 15px; margin-bottom: 8px; border-radius: 6px;
  border-left: 3px solid {INFO_ITEM_BORDER_COLOR}; break-inside: avoid; }}
.list-grid-2 {{ display: grid; grid-template-columns: 1fr 1fr; gap: 10px; }}
.tier-badge {{ display: inline-block; padding: 8px 16px; border-radius: 20px; font-weight: bold;
  text-transform: uppercase; font-size: 12px; }}
.meter {{ height: 8px; background: #e5e7eb; border-radius: 4px; margin-top: 8px; overflow: hidden; }}
.meter-fill {{ height: 100%; }}
.admission-required {{ padding: 15px; border-radius: 8px; font-weight: bold; text-align: center;
  margin: 15px 0; }}
.diseases-list {{ display: flex; flex-wrap: wrap; gap: 10px; }}
.disease-tag {{ background: {TAG_BG_COLOR}; color: {TAG_TEXT_COLOR}; padding: 6px 12px; border-radius: 15px;
  font-size: 14px; border: 1px solid {TAG_BORDER_COLOR}; }}
.disclaimer {{ background: {DISCLAIMER_BG_COLOR}; border: 2px solid {DISCLAIMER_BORDER_COLOR}; padding: 20px;
  border-radius: 8px; margin-top: 30px; text-align: center; page-break-inside: avoid; }}
.disclaimer-title {{ font-weight: bold; color: {DISCLAIMER_TITLE_COLOR}; margin-bottom: 10px; font-size: 16px; }}
.disclaimer-text {{ color: {DISCLAIMER_TEXT_COLOR}; font-size: 14px; }}
.footer {{ margin-top: 40px; padding-top: 20px; border-top: 2px solid {HEADER_RULE_COLOR}; text-align: center;
  color: {MUTED_TEXT_COLOR}; font-size: 12px; page-break-inside: avoid; }}
"""


def _token_css(token: StyleToken) -> str:
    return (
        f".{token.key} {{ background: {token.print_bg}; color: {token.print_text}; "
        f"border: 2px solid {token.print_border}; }}\n"
        f".meter-fill.{token.key} {{ background: {token.print_border}; border: none; }}\n"
    )


def _stylesheet() -> str:
    tokens = [*TRIAGE_STYLES.values(), *RISK_STYLES.values(), ADMISSION_STYLE]
    return _BASE_CSS + "".join(_token_css(token) for token in tokens)


class HTMLFormatter:
    """Renders a ``PrintDocument`` as standalone print-ready HTML."""

    def __init__(self) -> None:
        self._renderers: dict[str, Callable[[Any], str]] = {
            HeaderBlock.kind: self._header,
            HeadingBlock.kind: self._heading,
            KeyValueBlock.kind: self._key_value,
            BulletListBlock.kind: self._bullet_list,
            TagListBlock.kind: self._tag_list,
            AdmissionWarningBlock.kind: self._admission_warning,
            DisclaimerBlock.kind: self._disclaimer,
            FooterBlock.kind: self._footer,
        }

    # ── Public API ───────────────────────────────────────────────────

    def render(self, document: PrintDocument, *, auto_print: bool = False) -> str:
        """Return the full HTML document as text.

        With *auto_print*, the markup opens the print dialog as soon as it has
        loaded and closes its window afterwards.  Any settle delay belongs to
        the caller, before the markup is handed to a browser.
        """
        body = "\n".join(self._render_sections(document.blocks))
        script = ""
        if auto_print:
            script = _AUTO_PRINT_SCRIPT
        return (
            "<!DOCTYPE html>\n"
            "<html>\n"
            "<head>\n"
            '<meta charset="UTF-8">\n'
            f"<title>{escape(document.title)}</title>\n"
            f"<style>{_stylesheet()}</style>\n"
            "</head>\n"
            "<body>\n"
            f"{body}\n"
            f"{script}"
            "</body>\n"
            "</html>\n"
        )

    def format(self, subject: PrintDocument, **kwargs: Any) -> bytes:
        return self.render(subject, **kwargs).encode("utf-8")

    def format_to_file(self, subject: PrintDocument, path: Path, **kwargs: Any) -> Path:
        path.write_bytes(self.format(subject, **kwargs))
        return path

    @property
    def content_type(self) -> str:
        return "text/html"

    # ── Section grouping ─────────────────────────────────────────────

    def _render_sections(self, blocks: tuple[Block, ...]) -> list[str]:
        """Wrap runs of blocks that share a section in one ``.section`` div.

        Header, disclaimer and footer carry their own wrappers.
        """
        parts: list[str] = []
        current: str | None = None
        buffer: list[str] = []

        def flush() -> None:
            if buffer:
                parts.append(f'<div class="section section-{current}">\n' + "\n".join(buffer) + "\n</div>")
                buffer.clear()

        for block in blocks:
            html = self._renderers[block.kind](block)
            if isinstance(block, (HeaderBlock, DisclaimerBlock, FooterBlock)):
                flush()
                current = None
                parts.append(html)
                continue
            if block.section != current:
                flush()
                current = block.section
            buffer.append(html)
        flush()
        return parts

    # ── Block renderers ──────────────────────────────────────────────

    @staticmethod
    def _header(block: HeaderBlock) -> str:
        return (
            '<div class="header">\n'
            f'  <div class="app-name">{escape(block.app_name)}</div>\n'
            f'  <div class="report-title">{escape(block.title)}</div>\n'
            f'  <div class="report-date">Generated on {escape(block.generated_on)}</div>\n'
            "</div>"
        )

    @staticmethod
    def _heading(block: HeadingBlock) -> str:
        return f'<div class="section-title">{escape(block.text)}</div>'

    @staticmethod
    def _key_value(block: KeyValueBlock) -> str:
        value = escape(block.value)
        if block.style is not None:
            value = f'<span class="tier-badge {block.style.key}">{value}</span>'
        meter = ""
        if block.meter is not None:
            fill_class = f"meter-fill {block.style.key}" if block.style is not None else "meter-fill"
            meter = f'\n  <div class="meter"><div class="{fill_class}" style="width: {block.meter}%"></div></div>'
        return (
            '<div class="info-item">\n'
            f'  <div class="info-label">{escape(block.label)}</div>\n'
            f'  <div class="info-value">{value}</div>{meter}\n'
            "</div>"
        )

    @staticmethod
    def _bullet_list(block: BulletListBlock) -> str:
        items = "\n".join(f'  <div class="list-item">&bull; {escape(item)}</div>' for item in block.items)
        grid_class = f' class="list-grid-{block.columns}"' if block.columns > 1 else ""
        label = f'<div class="list-label">{escape(block.label)}</div>\n' if block.label else ""
        return f"{label}<div{grid_class}>\n{items}\n</div>"

    @staticmethod
    def _tag_list(block: TagListBlock) -> str:
        tags = "".join(f'<span class="disease-tag">{escape(item)}</span>' for item in block.items)
        return f'<div class="diseases-list">{tags}</div>'

    @staticmethod
    def _admission_warning(block: AdmissionWarningBlock) -> str:
        return f'<div class="admission-required {block.style.key}">&#9888; {escape(block.text)}</div>'

    @staticmethod
    def _disclaimer(block: DisclaimerBlock) -> str:
        return (
            '<div class="disclaimer">\n'
            f'  <div class="disclaimer-title">&#9888; {escape(block.title)}</div>\n'
            f'  <div class="disclaimer-text">{escape(block.text)}</div>\n'
            "</div>"
        )

    @staticmethod
    def _footer(block: FooterBlock) -> str:
        lines = "\n".join(f"  <div>{escape(line)}</div>" for line in block.lines)
        return f'<div class="footer">\n{lines}\n</div>'
