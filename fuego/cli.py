"""Command line tool that scaffolds entity domains."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from .templates import render_template

DEFAULT_CONTROLLER_ENTITY = "newEntity"
DEFAULT_SERVICE_ENTITY = "newController"


def create_entity_file(
    entity_name: str,
    template_name: str,
    output_name: str,
    root: str | Path = ".",
) -> str:
    """Render a template for an entity into root/domains/<entity>/ and return its text."""
    content = render_template(template_name, entity_name)
    directory = Path(root) / "domains" / entity_name
    directory.mkdir(mode=0o755, parents=True, exist_ok=True)
    (directory / output_name).write_text(content, encoding="utf-8")
    return content


def service_command(entity_name: str = "", root: str | Path = ".") -> list[Path]:
    """Create the entity and service files; return the paths written."""
    if not entity_name:
        entity_name = DEFAULT_SERVICE_ENTITY
        print("Note: You can add an entity name as an argument. Example: `fuego service books`")

    outputs = [("entity.py", f"{entity_name}.py"), ("service.py", f"{entity_name}_service.py")]
    for template, output in outputs:
        create_entity_file(entity_name, template, output, root)

    print(f"🔥 Service {entity_name} created successfully")
    directory = Path(root) / "domains" / entity_name
    return [directory / output for _, output in outputs]


def controller_command(
    entity_name: str = "",
    with_service: bool = False,
    root: str | Path = ".",
) -> list[Path]:
    """Create the entity and controller files, and the service first when asked."""
    written: list[Path] = []
    if with_service:
        written.extend(service_command(entity_name, root))

    if not entity_name:
        entity_name = DEFAULT_CONTROLLER_ENTITY
        print("Note: You can add a controller name as an argument. Example: `fuego controller books`")

    outputs = [("entity.py", f"{entity_name}.py"), ("controller.py", f"{entity_name}_controller.py")]
    for template, output in outputs:
        create_entity_file(entity_name, template, output, root)

    print(f"🔥 Controller {entity_name} created successfully")
    directory = Path(root) / "domains" / entity_name
    written.extend(directory / output for _, output in outputs)
    return written


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fuego", description="The framework for busy developers")
    sub = parser.add_subparsers(dest="command")

    controller = sub.add_parser("controller", aliases=["c"], help="creates a new controller file")
    controller.add_argument("names", nargs="*")
    controller.add_argument("--with-service", action="store_true", help="enable service file generation")
    controller.set_defaults(run=lambda a: controller_command(_first(a.names), a.with_service))

    service = sub.add_parser("service", aliases=["s"], help="creates a new service file")
    service.add_argument("names", nargs="*")
    service.set_defaults(run=lambda a: service_command(_first(a.names)))
    return parser


def _first(names: list[str]) -> str:
    return names[0] if names else ""


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line tool; return the exit status."""
    args = _build_parser().parse_args(argv)
    run = getattr(args, "run", None)
    if run is None:
        print("The 🔥 CLI!")
        return 0
    try:
        run(args)
    except OSError as exc:
        print(f"fuego: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())