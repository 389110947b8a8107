"""
Command Line Interface
======================

Render the documentation header from a Doxygen build step.

    doxyheader render --context header.yaml --enable TITLEAREA --output header.php
    doxyheader inspect --template api_embedded_header.html
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml  # type: ignore[import-untyped]

from doxyheader import __version__
from doxyheader.config.logging import get_logger
from doxyheader.core.exceptions import TemplateError
from doxyheader.core.rendering.renderer import (
    BaseTemplateRenderer,
    TemplateRendererFactory,
    load_template,
)
from doxyheader.core.template.context import build_context, merge_context
from doxyheader.core.template.parser import TemplateParser, parse_template
from doxyheader.models.schemas import TemplateContext

logger = get_logger(__name__)


def detect_context_format(content: str) -> str:
    """
    Detect context file format from content.

    Args:
        content: Raw context file content

    Returns:
        "json" or "yaml"
    """
    content = content.strip()
    if content.startswith("{"):
        return "json"
    try:
        json.loads(content)
        return "json"
    except json.JSONDecodeError:
        return "yaml"


def load_context_file(path: Path) -> Dict[str, Any]:
    """
    Load a flat context mapping from a JSON or YAML file.

    Raises:
        TemplateError: If the file cannot be read or does not hold a mapping
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TemplateError(f"Cannot read context file {path}: {e}") from e

    if not content.strip():
        return {}

    try:
        if detect_context_format(content) == "json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise TemplateError(f"Invalid context file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TemplateError(
            f"Context file {path} must contain a mapping, got {type(data).__name__}"
        )
    return data


def _parse_assignment(text: str) -> tuple[str, str]:
    if "=" not in text:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {text!r}")
    name, value = text.split("=", 1)
    return name.strip().lstrip("$"), value


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="doxyheader", description="Render the Doxygen HTML header for the API documentation"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    render_parser = subparsers.add_parser("render", help="Render a header template")
    render_parser.add_argument("--template", help="Template file name or path (default: bundled header)")
    render_parser.add_argument("--context", type=Path, help="JSON or YAML file with tokens and flags")
    render_parser.add_argument(
        "--set",
        dest="assignments",
        action="append",
        type=_parse_assignment,
        default=[],
        metavar="NAME=VALUE",
        help="Set a token value (repeatable)",
    )
    render_parser.add_argument(
        "--enable", action="append", default=[], metavar="REGION", help="Enable a region (repeatable)"
    )
    render_parser.add_argument(
        "--disable", action="append", default=[], metavar="REGION", help="Disable a region (repeatable)"
    )
    render_parser.add_argument(
        "--enable-all", action="store_true", help="Enable every region the template defines"
    )
    render_parser.add_argument(
        "--renderer",
        choices=TemplateRendererFactory.available_renderers(),
        help="Renderer type (default: configured renderer)",
    )
    render_parser.add_argument("--output", type=Path, help="Output file (default: stdout)")

    inspect_parser = subparsers.add_parser("inspect", help="List tokens and regions of a template")
    inspect_parser.add_argument("--template", help="Template file name or path (default: bundled header)")

    return parser


def _collect_context(
    args: argparse.Namespace, markup: str, renderer: BaseTemplateRenderer
) -> TemplateContext:
    """Layer context sources: file, then --enable-all, --set, --enable, --disable."""
    context = build_context(load_context_file(args.context) if args.context is not None else {})

    overrides: Dict[str, Any] = {}
    # Token-only renderers parse no regions
    if args.enable_all and renderer.parse_regions:
        for region in TemplateParser.collect_regions(renderer.parse(markup)):
            overrides[region] = True

    for name, value in args.assignments:
        overrides[name] = value
    for region in args.enable:
        overrides[region] = True
    for region in args.disable:
        overrides[region] = False
    return merge_context(context, overrides)


def run_render(args: argparse.Namespace) -> int:
    markup = load_template(args.template)
    renderer = TemplateRendererFactory.create_renderer(args.renderer)
    context = _collect_context(args, markup, renderer)
    result = renderer.render_result(markup, context)

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(result.html, encoding="utf-8")
        logger.info("Header written", output=str(args.output), html_length=len(result.html))
    else:
        sys.stdout.write(result.html)
    return 0


def run_inspect(args: argparse.Namespace) -> int:
    document = parse_template(load_template(args.template))
    tokens: List[str] = TemplateParser.collect_tokens(document)
    regions: List[str] = TemplateParser.collect_regions(document)

    print("tokens: " + ", ".join(f"${name}" for name in tokens))
    print("regions: " + ", ".join(regions))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {"render": run_render, "inspect": run_inspect}
    try:
        return commands[args.command](args)
    except TemplateError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
