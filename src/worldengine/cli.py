"""Command-line entry point for checking and converting world files.

Usage:
    worldengine validate world.json
    worldengine export world.json -o world.v1.json
    worldengine default -o demo.json
    worldengine tree world.json
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from worldengine.config import EditorSettings
from worldengine.core import (
    ValidationError,
    WorldDocumentError,
    default_world,
    deserialize_world,
    fingerprint,
    iter_nodes,
    serialize_world,
)


def _write(text: str, output: str | None) -> None:
    if output is None:
        sys.stdout.write(text + "\n")
    else:
        Path(output).write_text(text + "\n", encoding="utf-8")


def cmd_validate(args: argparse.Namespace) -> int:
    """Report every problem in a world file."""
    try:
        deserialize_world(Path(args.file).read_text(encoding="utf-8"))
    except ValidationError as e:
        for error in e.errors:
            print(error)
        return 1
    except WorldDocumentError as e:
        print(e)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"{args.file}: cannot read: {e}")
        return 1
    print(f"{args.file}: ok")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    """Re-serialize a world file at the current schema version."""
    settings = EditorSettings()
    try:
        world = deserialize_world(Path(args.file).read_text(encoding="utf-8"))
    except WorldDocumentError as e:
        print(e, file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"{args.file}: cannot read: {e}", file=sys.stderr)
        return 1
    text = serialize_world(world, indent=settings.wire_indent)
    _write(text, args.output)
    print(f"hash {fingerprint(text)}", file=sys.stderr)
    return 0


def cmd_default(args: argparse.Namespace) -> int:
    """Write the built-in demo world."""
    _write(serialize_world(default_world(), indent=EditorSettings().wire_indent), args.output)
    return 0


def cmd_tree(args: argparse.Namespace) -> int:
    """Print the node hierarchy in navigation order."""
    try:
        world = deserialize_world(Path(args.file).read_text(encoding="utf-8"))
    except WorldDocumentError as e:
        print(e, file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"{args.file}: cannot read: {e}", file=sys.stderr)
        return 1
    for node, depth in iter_nodes(world["nodes"]):
        name = node.get("name", node["id"])
        tags = f" [{', '.join(node['tags'])}]" if node.get("tags") else ""
        print(f"{'  ' * depth}{name} ({node['id']}){tags}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="worldengine", description="World document tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Validate a world file")
    validate.add_argument("file")
    validate.set_defaults(handler=cmd_validate)

    export = sub.add_parser("export", help="Re-serialize at the current schema version")
    export.add_argument("file")
    export.add_argument("-o", "--output")
    export.set_defaults(handler=cmd_export)

    default = sub.add_parser("default", help="Write the built-in demo world")
    default.add_argument("-o", "--output")
    default.set_defaults(handler=cmd_default)

    tree = sub.add_parser("tree", help="Print the node hierarchy")
    tree.add_argument("file")
    tree.set_defaults(handler=cmd_tree)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
