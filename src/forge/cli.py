"""Command line interface for forge."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Mapping, Sequence, TextIO

from . import __version__
from .errors import ForgeError, KeyNotFound
from .models import Template
from .registry import TemplateRegistry
from .scaffold import ProjectScaffolder
from .store import TemplateStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="forge", description="Universal project initializer")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"forge {__version__}",
    )
    parser.add_argument("--verbose", action="store_true", help="Log progress information")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new_parser = subparsers.add_parser("new", help="create a new project with an architecture")
    new_parser.add_argument("name", help="Project directory to create")
    new_parser.add_argument("-a", "--arch", help="Architecture template to use")
    new_parser.add_argument("--git-init", action="store_true", help="Initialize a git repository")
    new_parser.add_argument(
        "--no-readme",
        dest="readme_gen",
        action="store_false",
        help="Do not generate README.md",
    )
    new_parser.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Write into the destination even if it is not empty",
    )

    subparsers.add_parser("list", help="list available architecture templates")

    add_parser = subparsers.add_parser(
        "add-template", help="add a local template available only on this machine"
    )
    add_parser.add_argument("key", help='Key used to reference the template (e.g. "my-backend")')
    add_parser.add_argument(
        "--no-edit",
        dest="edit",
        action="store_false",
        help="Do not open the template file in an editor",
    )

    remove_parser = subparsers.add_parser("remove-template", help="remove a local template")
    remove_parser.add_argument("key", help="Key of the template to remove")

    return parser


def _prompt_for_key(templates: Mapping[str, Template], stdin: TextIO) -> str:
    keys = sorted(templates)
    print("Select architecture:")
    for index, key in enumerate(keys, start=1):
        print(f"  {index}) {key} - {templates[key].name}")
    answer = stdin.readline().strip()
    if answer in templates:
        return answer
    if answer.isdigit() and 1 <= int(answer) <= len(keys):
        return keys[int(answer) - 1]
    raise KeyNotFound(answer)


def _handle_new(args: argparse.Namespace, store: TemplateStore) -> int:
    templates = store.resolve()
    key = args.arch or _prompt_for_key(templates, sys.stdin)
    if key not in templates:
        raise KeyNotFound(key)

    report = ProjectScaffolder().create(
        args.name,
        templates[key],
        git_init=args.git_init,
        readme_gen=args.readme_gen,
        force=args.force,
    )
    print(f"Project created at {report.path}")
    if report.git_initialized is False:
        print(f"warning: {report.vcs_error}", file=sys.stderr)
    return 0


def _handle_list(store: TemplateStore) -> int:
    templates = store.resolve()
    print("\nAvailable architectures:\n")
    for key in sorted(templates):
        template = templates[key]
        print(f"  {key} - {template.name}")
        print(f"    {template.description}\n")
    return 0


def _handle_add(args: argparse.Namespace, store: TemplateStore) -> int:
    result = TemplateRegistry(store).add(args.key, edit=args.edit)
    if result.created:
        print(f"Added template '{result.key}' to:")
    else:
        print(f"Template '{result.key}' already exists in:")
    print(f"  {result.path}")
    if result.created:
        print(f"\nRun: forge new <project> --arch {result.key}")
    return 0


def _handle_remove(args: argparse.Namespace, store: TemplateStore) -> int:
    if TemplateRegistry(store).remove(args.key):
        print(f"Removed local template '{args.key}'")
    else:
        print(f"Local template '{args.key}' not found")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        store = TemplateStore()
        if args.command == "new":
            return _handle_new(args, store)
        if args.command == "list":
            return _handle_list(store)
        if args.command == "add-template":
            return _handle_add(args, store)
        if args.command == "remove-template":
            return _handle_remove(args, store)
    except ForgeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
