# recipe_jsonizer/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from recipe_jsonizer.app.config import get_settings
from recipe_jsonizer.app.domain.errors import InvalidRecipeDocumentError
from recipe_jsonizer.app.domain.models import RecipeOverrides
from recipe_jsonizer.services.assembler import build_recipe
from recipe_jsonizer.services.persistence import load_recipe, save_recipe, serialize_recipe
from recipe_jsonizer.services.render import render_recipe

log = logging.getLogger("recipe_jsonizer.cli")

EXIT_INVALID_DOCUMENT = 2


def _read_text(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _split_tags(value: Optional[str]) -> list[str]:
    return [t.strip() for t in (value or "").split(",") if t.strip()]


def run_convert(args: argparse.Namespace) -> int:
    overrides = RecipeOverrides(
        title=args.title,
        base_servings=max(1, args.servings) if args.servings is not None else None,
        tags=_split_tags(args.tags),
        memo=args.memo,
        source=args.source,
    )
    recipe = build_recipe(_read_text(args.input), overrides)

    if args.output_dir:
        path = save_recipe(recipe, Path(args.output_dir))
        print(path)
    else:
        print(serialize_recipe(recipe))
    return 0


def run_scale(args: argparse.Namespace) -> int:
    try:
        recipe = load_recipe(Path(args.document))
    except InvalidRecipeDocumentError as exc:
        log.error("%s", exc)
        return EXIT_INVALID_DOCUMENT

    rendered = render_recipe(recipe, args.servings)
    print(f"{rendered.title} (기준 {rendered.base_servings}인분 → {rendered.target_servings}인분)")
    if rendered.time_total:
        print(f"조리시간: {rendered.time_total}")
    for group in rendered.groups:
        if group.name:
            print(f"\n[{group.name}]")
        for item in group.items:
            print(f"- {item.display}")
    if rendered.steps:
        print()
        for number, text in enumerate(rendered.steps, start=1):
            print(f"{number}. {text}")
    if rendered.memo:
        print(f"\n{rendered.memo}")
    return 0


def run_serve(args: argparse.Namespace) -> int:
    settings = get_settings()
    host = args.host or settings.host
    port = args.port or settings.port
    log.info("Starting server on %s:%d", host, port)
    uvicorn.run("recipe_jsonizer.app.main:app", host=host, port=port, log_level=settings.log_level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="recipe-jsonizer", description="Recipe text to JSON, and back to servings")
    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Convert recipe text into a JSON document")
    convert.add_argument("input", help="Text file, or - for stdin")
    convert.add_argument("--title")
    convert.add_argument("--servings", type=int, help="Base servings (overrides the text)")
    convert.add_argument("--tags", help="Comma separated tags")
    convert.add_argument("--memo")
    convert.add_argument("--source")
    convert.add_argument("-o", "--output-dir", help="Write <title>_<id>.json into this directory")
    convert.set_defaults(func=run_convert)

    scale = sub.add_parser("scale", help="Print a document's ingredients for a serving count")
    scale.add_argument("document")
    scale.add_argument("--servings", type=float, required=True)
    scale.set_defaults(func=run_scale)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)
    serve.set_defaults(func=run_serve)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
