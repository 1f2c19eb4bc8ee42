import sys
from pathlib import Path

from recipemark.core.logging_config import get_logger, set_package_level
from recipemark.core.render_config import load_render_config
from recipemark.services.markdown_renderer import build_renderer

logger = get_logger(__name__)


def main():
    if len(sys.argv) not in (2, 3):
        raise SystemExit("Usage: python scripts/render_recipe.py RECIPE.md [OUTPUT.html]")

    input_path = Path(sys.argv[1])
    output_path = Path(sys.argv[2]) if len(sys.argv) == 3 else input_path.with_suffix(".html")

    config = load_render_config()
    set_package_level(config.log_level)
    renderer = build_renderer(config)

    with open(input_path, "r", encoding="utf-8") as handle:
        markdown = handle.read()

    html = renderer.render(markdown)

    with open(output_path, "w", encoding="utf-8") as handle:
        handle.write(html)

    logger.info(f"Rendered {input_path} to {output_path}")


if __name__ == "__main__":
    main()
