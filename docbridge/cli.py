#!/usr/bin/env python3
"""
docbridge command line.

Usage:
    docbridge styles report.docx [--json]
    docbridge css report.docx [-o report.css] [--no-inline] [--print]
    docbridge inject page.html style.css [-o out.html] [--no-important]
    docbridge convert report.docx html [-o report.html] [--theme github]
    docbridge plan markdown pdf [--source notes.md]
    docbridge serve
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import configure_logging, get_settings
from .convert import Converter
from .errors import DocBridgeError
from .extractor import extract_styles
from .html_inject import inject_styles_traced
from .planner import plan_conversion


def _write_or_print(text: str, output: Path | None):
    if output is None:
        sys.stdout.write(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    print(f"Saved: {output}", file=sys.stderr)


def cmd_styles(args):
    result = extract_styles(args.input)
    if args.json:
        print(json.dumps(result.summary(), indent=2, ensure_ascii=False))
        return
    print(f"# Styles: {args.input.name}\n")
    print("| Style ID | Name | Type | Class | Element | Declarations |")
    print("|---|---|---|---|---|---|")
    for style_id, s in sorted(result.styles.items()):
        element = s.mapping.target_element if s.mapping else ""
        print(f"| {style_id} | {s.name} | {s.type} | {s.class_name} | {element} | {len(s.css)} |")
    print(f"\nDirect formatting entries: {len(result.document_styles)}")
    if result.fonts:
        print(f"Fonts: {', '.join(sorted(result.fonts))}")
    if result.media:
        print(f"Images: {len(result.media)}")


def cmd_css(args):
    result = extract_styles(args.input, include_inline=not args.no_inline,
                            include_print=args.print_css)
    _write_or_print(result.css, args.output)


def cmd_inject(args):
    html = args.html.read_text(encoding="utf-8")
    css = args.css.read_text(encoding="utf-8") if args.css else ""
    output, trace = inject_styles_traced(html, css, title=args.title,
                                         important=not args.no_important)
    print(" -> ".join(state.value for state in trace), file=sys.stderr)
    _write_or_print(output, args.output)


def cmd_convert(args):
    result = Converter(get_settings()).convert(
        args.input, args.target, args.output, theme=args.theme,
        include_images=not args.no_images, toc=args.toc, include_css=args.include_css,
    )
    print(f"Saved: {result.output_path}" if result.html_path is None
          else f"HTML ready for PDF rendering: {result.html_path}")
    for step in result.instructions:
        print(f"  {step['tool']}: {json.dumps(step['arguments'])}")


def cmd_plan(args):
    plan = plan_conversion(args.source_format, args.target_format, args.source,
                           theme=args.theme)
    print(json.dumps(plan.to_dict(), indent=2))
    if not plan.success:
        sys.exit(1)


def cmd_serve(_args):
    from .server import run

    run()


def build_parser():
    parser = argparse.ArgumentParser(
        prog="docbridge",
        description="Style-preserving DOCX / Markdown / HTML conversion",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING, ...")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("styles", help="List the styles of a DOCX")
    p.add_argument("input", type=Path)
    p.add_argument("--json", action="store_true", help="Full extraction result as JSON")
    p.set_defaults(func=cmd_styles)

    p = sub.add_parser("css", help="Generate CSS from a DOCX")
    p.add_argument("input", type=Path)
    p.add_argument("-o", "--output", type=Path, default=None)
    p.add_argument("--no-inline", action="store_true", help="Skip direct-formatting rules")
    p.add_argument("--print", dest="print_css", action="store_true", help="Add @media print rules")
    p.set_defaults(func=cmd_css)

    p = sub.add_parser("inject", help="Merge CSS into an HTML file")
    p.add_argument("html", type=Path)
    p.add_argument("css", type=Path, nargs="?", default=None)
    p.add_argument("-o", "--output", type=Path, default=None)
    p.add_argument("--title", default=None)
    p.add_argument("--no-important", action="store_true", help="Merge without !important")
    p.set_defaults(func=cmd_inject)

    p = sub.add_parser("convert", help="Convert a file")
    p.add_argument("input")
    p.add_argument("target", help="docx | markdown | html | txt | pdf")
    p.add_argument("-o", "--output", default=None)
    p.add_argument("--theme", default=None)
    p.add_argument("--toc", action="store_true")
    p.add_argument("--no-images", action="store_true")
    p.add_argument("--include-css", action="store_true", help="HTML -> Markdown: keep CSS")
    p.set_defaults(func=cmd_convert)

    p = sub.add_parser("plan", help="Show the tool calls for a conversion")
    p.add_argument("source_format")
    p.add_argument("target_format")
    p.add_argument("--source", default=None, help="Source file to fill into the first step")
    p.add_argument("--theme", default=None)
    p.set_defaults(func=cmd_plan)

    p = sub.add_parser("serve", help="Run the MCP server on stdio")
    p.set_defaults(func=cmd_serve)
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.command != "serve":
        configure_logging(args.log_level or get_settings().LOG_LEVEL)

    for name in ("input", "html", "css"):
        path = getattr(args, name, None)
        if isinstance(path, Path) and not path.is_file():
            print(f"Error: File not found: {path}", file=sys.stderr)
            sys.exit(1)

    try:
        args.func(args)
    except (DocBridgeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
