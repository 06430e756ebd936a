"""Command line entry point of konf."""

from __future__ import annotations

import argparse
import json
import sys

from konf import config, logger
from konf.commands.cleanup import CleanupCommand
from konf.commands.completion import CompletionCommand, ShellCompDirective
from konf.commands.delete import DeleteCommand
from konf.commands.importer import ImportCommand
from konf.commands.namespace import NamespaceCommand
from konf.commands.set_konf import SetCommand
from konf.commands.shellwrapper import ShellwrapperCommand
from konf.commands.version import VersionCommand
from konf.dirs import ensure_dir
from konf.errors import KonfError

_DESCRIPTION = """konf is a lightweight kubeconfig manager

Before switching between kubeconfigs make sure to import them via 'konf import'
Afterwards switch between different kubeconfigs via 'konf set'"""

_KONF_DIR_HELP = (
    "konfs directory for kubeconfigs and tracking active konfs "
    "(default is $HOME/.kube/konfs)"
)
_SILENT_HELP = "suppress log output if set to true (default is false)"

_COMMAND_NAMES = (
    "cleanup",
    "completion",
    "delete",
    "import",
    "namespace",
    "set",
    "shellwrapper",
    "version",
)
_SHELLS = ("bash", "zsh", "fish")


def _add_global_options(parser: argparse.ArgumentParser, konf_dir, silent) -> None:
    parser.add_argument("--konf-dir", default=konf_dir, help=_KONF_DIR_HELP)
    parser.add_argument("--silent", action="store_true", default=silent, help=_SILENT_HELP)


def _optional(value: str | None) -> list[str]:
    return [] if value is None else [value]


def _run_cleanup(args: argparse.Namespace) -> None:
    CleanupCommand().run([])


def _run_completion(args: argparse.Namespace) -> None:
    CompletionCommand().run([args.shell])


def _run_delete(args: argparse.Namespace) -> None:
    DeleteCommand().run(args.konf_ids)


def _run_import(args: argparse.Namespace) -> None:
    ImportCommand(move=args.move).run([args.path])


def _run_namespace(args: argparse.Namespace) -> None:
    NamespaceCommand().run(_optional(args.namespace))


def _run_set(args: argparse.Namespace) -> None:
    SetCommand().run(_optional(args.konf_id))


def _run_shellwrapper(args: argparse.Namespace) -> None:
    ShellwrapperCommand().run([args.shell])


def _run_version(args: argparse.Namespace) -> None:
    VersionCommand().run([])


def _strip_global_options(words: list[str]) -> list[str]:
    kept = []
    remaining = iter(words)
    for word in remaining:
        if word == "--silent" or word.startswith("--konf-dir="):
            continue
        if word == "--konf-dir":
            next(remaining, None)
            continue
        kept.append(word)
    return kept


def _complete(words: list[str]) -> tuple[list[str], ShellCompDirective]:
    *preceding, to_complete = words or [""]
    preceding = _strip_global_options(preceding)
    if not preceding:
        names = [name for name in _COMMAND_NAMES if name.startswith(to_complete)]
        return names, ShellCompDirective.NO_FILE_COMP

    command, rest = preceding[0], preceding[1:]
    if command in ("completion", "shellwrapper"):
        if rest:
            return [], ShellCompDirective.NO_FILE_COMP
        return [s for s in _SHELLS if s.startswith(to_complete)], ShellCompDirective.NO_FILE_COMP
    if command == "delete":
        return DeleteCommand().complete(rest, to_complete)
    if command == "set":
        return SetCommand().complete(rest, to_complete)
    if command in ("namespace", "ns"):
        return NamespaceCommand().complete(rest, to_complete)
    if command == "import":
        return [], ShellCompDirective.DEFAULT
    return [], ShellCompDirective.NO_FILE_COMP


def _run_complete(args: argparse.Namespace) -> None:
    candidates, directive = _complete(args.words)
    for candidate in candidates:
        print(candidate)
    print(f":{int(directive)}")


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for konf and all its sub-commands."""
    parser = argparse.ArgumentParser(
        prog="konf",
        description=_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    _add_global_options(parser, "", False)
    parser.set_defaults(run=None)

    # global options may also follow the sub-command
    common = argparse.ArgumentParser(add_help=False)
    _add_global_options(common, argparse.SUPPRESS, argparse.SUPPRESS)

    commands = parser.add_subparsers(dest="command", metavar="<command>")

    def add(name: str, help_text: str, run, **kwargs) -> argparse.ArgumentParser:
        sub = commands.add_parser(name, help=help_text, parents=[common], **kwargs)
        sub.set_defaults(run=run)
        return sub

    add("cleanup", "Cleanup inactive kubeconfigs", _run_cleanup)

    completion = add("completion", "Generate completion script", _run_completion)
    completion.add_argument("shell", metavar="{bash,zsh,fish}")

    delete = add("delete", "Delete kubeconfig", _run_delete)
    delete.add_argument("konf_ids", nargs="*", metavar="konf-id")

    importer = add("import", "Import kubeconfigs into konf store", _run_import)
    importer.add_argument("path")
    importer.add_argument(
        "-m",
        "--move",
        action="store_true",
        help="whether the original kubeconfig should be deleted after successful import "
        "(default is false)",
    )

    namespace = add(
        "namespace", "Change namespace in current context", _run_namespace, aliases=["ns"]
    )
    namespace.add_argument("namespace", nargs="?")

    set_parser = add("set", "Set kubeconfig to use in current shell", _run_set)
    set_parser.add_argument("konf_id", nargs="?", metavar="konf-id")

    shellwrapper = add(
        "shellwrapper", "Shell wrapper and hooks for konf command", _run_shellwrapper
    )
    shellwrapper.add_argument("shell")

    add("version", "Print version info", _run_version)

    complete = commands.add_parser("__complete")
    complete.add_argument("words", nargs=argparse.REMAINDER)
    complete.set_defaults(run=_run_complete)

    return parser


def execute(argv: list[str] | None = None) -> None:
    """Parse the command line, set up config and directories, and run the command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    conf = config.default_config()
    if args.konf_dir:
        conf.konf_dir = args.konf_dir
    if args.silent:
        conf.silent = True
    if conf.silent:
        logger.init_logger(logger.DISCARD, logger.DISCARD)
    else:
        logger.init_logger()
    config.set_global_config(conf)

    ensure_dir()

    if args.run is None:
        parser.print_help()
        return
    args.run(args)


def main(argv: list[str] | None = None) -> int:
    """Run konf and return its exit status."""
    try:
        execute(argv)
    except (KonfError, OSError) as exc:
        message = json.dumps(str(exc), ensure_ascii=False)
        print(f"konf execution has failed: {message}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())