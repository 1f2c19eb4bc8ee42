import re
from typing import Callable, List, Optional

from recipemark.core.logging_config import get_logger
from recipemark.core.render_config import RenderConfig, load_render_config
from recipemark.services.duration_scanner import DurationScanner
from recipemark.services.ingredient_matcher import IngredientMatcher
from recipemark.services.quantity_scanner import QuantityScanner
from recipemark.services.unit_catalog import UnitCatalog, default_catalog

logger = get_logger(__name__)

_TAG_SPLIT = re.compile(r"(<[^>]*>)")
_IMAGE = re.compile(r"!\[(.*?)\]\((.*?)\)")
_IMAGE_ONLY = re.compile(r"^\s*!\[(.*?)\]\((.*?)\)\s*$")
_BOLD = re.compile(r"(^|\W)\*\*(.*?)\*\*(\W|$)")
_ITALIC = re.compile(r"(^|\W)_(.*?)_(\W|$)")

_UNORDERED_ITEM = re.compile(r"^[-*]\s+(.*)$")
_ORDERED_ITEM = re.compile(r"^\d+\.\s+(.*)$")
_HORIZONTAL_RULE = re.compile(r"^---+\s*$")
_HEADING_2 = re.compile(r"^##\s*(.*)$")
_HEADING_1 = re.compile(r"^#\s*(.*)$")
_BLOCKQUOTE = re.compile(r"^>\s?(.*)$")
_BLOCK_HTML = re.compile(r"^\s*<(h[1-6]|ul|ol|blockquote|hr|p|img)\b", re.IGNORECASE)


def _outside_tags(html: str, transform: Callable[[str], str]) -> str:
    """Apply a text transform to everything except markup, so attributes stay intact."""
    parts = _TAG_SPLIT.split(html)
    return "".join(part if index % 2 else transform(part) for index, part in enumerate(parts))


def render_inline(text: str) -> str:
    """Images, bold and italic."""
    html = _IMAGE.sub(r'<img src="\2" alt="\1">', text)
    html = _outside_tags(html, lambda part: _BOLD.sub(r"\1<strong>\2</strong>\3", part))
    return _outside_tags(html, lambda part: _ITALIC.sub(r"\1<em>\2</em>\3", part))


class MarkdownRenderer:
    """Renders recipe Markdown to HTML, annotating list items with quantities, durations and ingredients."""

    def __init__(
        self,
        quantity_scanner: QuantityScanner,
        duration_scanner: DurationScanner,
        ingredient_matcher: IngredientMatcher,
        convert_to_metric: bool = True,
        round_satisfying: bool = True
    ):
        self.quantity_scanner = quantity_scanner
        self.duration_scanner = duration_scanner
        self.ingredient_matcher = ingredient_matcher
        self.convert_to_metric = convert_to_metric
        self.round_satisfying = round_satisfying

    def annotate_item(
        self,
        text: str,
        convert_to_metric: Optional[bool] = None,
        round_satisfying: Optional[bool] = None
    ) -> str:
        """Quantities, then durations, then ingredients; each stage sees the previous stage's output."""
        metric = self.convert_to_metric if convert_to_metric is None else convert_to_metric
        rounding = self.round_satisfying if round_satisfying is None else round_satisfying

        html = _outside_tags(text, lambda part: self.quantity_scanner.annotate(part, metric, rounding))
        html = _outside_tags(html, self.duration_scanner.annotate)
        return self.ingredient_matcher.annotate(html)

    def render(
        self,
        markdown: str,
        convert_to_metric: Optional[bool] = None,
        round_satisfying: Optional[bool] = None
    ) -> str:
        blocks: List[str] = []
        paragraph: List[str] = []
        list_tag: Optional[str] = None
        list_items: List[str] = []

        def flush_paragraph() -> None:
            if paragraph:
                blocks.append("<p>" + "<br>".join(paragraph) + "</p>")
                paragraph.clear()

        def flush_list() -> None:
            nonlocal list_tag
            if list_items:
                items = "\n".join(f"<li>{item}</li>" for item in list_items)
                blocks.append(f"<{list_tag}>\n{items}\n</{list_tag}>")
                list_items.clear()
            list_tag = None

        for raw_line in markdown.replace("\r\n", "\n").split("\n"):
            line = raw_line.rstrip()

            item = _UNORDERED_ITEM.match(line)
            tag = "ul"
            if not item:
                item = _ORDERED_ITEM.match(line)
                tag = "ol"
            if item:
                flush_paragraph()
                if list_tag != tag:
                    flush_list()
                    list_tag = tag
                content = render_inline(item.group(1))
                list_items.append(self.annotate_item(content, convert_to_metric, round_satisfying))
                continue

            flush_list()
            if not line.strip():
                flush_paragraph()
                continue

            block = self._render_block_line(line)
            if block is not None:
                flush_paragraph()
                blocks.append(block)
            else:
                paragraph.append(render_inline(line))

        flush_list()
        flush_paragraph()
        return "\n".join(blocks)

    def _render_block_line(self, line: str) -> Optional[str]:
        if _BLOCK_HTML.match(line):
            return line.strip()
        if _HORIZONTAL_RULE.match(line):
            return "<hr>"
        match = _HEADING_2.match(line)
        if match:
            return f"<h2>{render_inline(match.group(1))}</h2>"
        match = _HEADING_1.match(line)
        if match:
            return f"<h1>{render_inline(match.group(1))}</h1>"
        match = _BLOCKQUOTE.match(line)
        if match:
            return f"<blockquote>{render_inline(match.group(1))}</blockquote>"
        match = _IMAGE_ONLY.match(line)
        if match:
            return f'<img src="{match.group(2)}" alt="{match.group(1)}">'
        return None


def build_renderer(config: Optional[RenderConfig] = None, catalog: UnitCatalog = default_catalog) -> MarkdownRenderer:
    """Wire the scanners from configuration; the ingredient database is read once here."""
    config = config or load_render_config()
    matcher = IngredientMatcher.from_file(config.ingredient_database)
    logger.info(
        f"Renderer ready: metric={config.convert_to_metric} rounding={config.round_satisfying} "
        f"tolerance={config.rounding_tolerance} ingredients={len(matcher.patterns)}"
    )
    return MarkdownRenderer(
        quantity_scanner=QuantityScanner(catalog, tolerance=config.rounding_tolerance),
        duration_scanner=DurationScanner(),
        ingredient_matcher=matcher,
        convert_to_metric=config.convert_to_metric,
        round_satisfying=config.round_satisfying
    )
