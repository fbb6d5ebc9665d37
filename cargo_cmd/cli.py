"""Command line interface for cargo-cmd."""
from __future__ import annotations

from argparse import REMAINDER, ArgumentParser, Namespace
from pathlib import Path
from typing import Iterable, List
import sys

from core.command_runner import RecordingCommandRunner, SubprocessCommandRunner

from .commands import CommandEntry, aggregate
from .context import Console
from .errors import CargoCmdError
from .executor import build_command_line, run_commands
from .manifest import Manifest, PackageManifest, RootManifest, VirtualManifest, classify
from .paths import MANIFEST_NAME


def _parse_arguments(argv: Iterable[str]) -> Namespace:
    parser = ArgumentParser(prog="cargo-cmd", description="Run commands declared in Cargo.toml metadata")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # cargo invokes external subcommands as `cargo-cmd cmd ...`
    cmd_parser = subparsers.add_parser("cmd", help="Run a command from [package.metadata.commands]")
    cmd_parser.add_argument("--manifest-path", help=f"Path to the manifest (default: ./{MANIFEST_NAME})")
    cmd_parser.add_argument("--dry-run", "-n", action="store_true", help="Print commands without executing them")
    cmd_parser.add_argument(
        "--log",
        "-l",
        choices=list(Console.LEVELS),
        default="error",
        help="Set log level (default: error)",
    )
    cmd_parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose output (maps to debug)")
    cmd_parser.add_argument("name", help="Command name to run")
    cmd_parser.add_argument("rest", nargs=REMAINDER, help="Extra arguments appended to every command")

    return parser.parse_args(list(argv))


def _describe(manifest: Manifest) -> str:
    if isinstance(manifest, PackageManifest):
        return "package manifest"
    if isinstance(manifest, RootManifest):
        return f"root package with {len(manifest.workspace.members)} workspace member(s)"
    if isinstance(manifest, VirtualManifest):
        return f"virtual manifest with {len(manifest.workspace.members)} workspace member(s)"
    raise TypeError(f"Unsupported manifest type: {type(manifest).__name__}")


def _extra_arguments(rest: List[str]) -> List[str]:
    if rest and rest[0] == "--":
        return rest[1:]
    return list(rest)


def _emit_dry_run_output(entries: Iterable[CommandEntry], extra_args: List[str]) -> None:
    runner = RecordingCommandRunner()
    for entry in entries:
        runner.run(build_command_line(entry.template, extra_args), note=entry.hook_name)
    for line in runner.iter_formatted():
        print(line)


def main(argv: Iterable[str] | None = None) -> int:
    args = _parse_arguments(sys.argv[1:] if argv is None else argv)
    workspace = Path.cwd()

    if args.command == "cmd":
        return _handle_cmd(args, workspace)
    raise ValueError(f"Unknown command: {args.command}")


def _handle_cmd(args: Namespace, workspace: Path) -> int:
    console = Console("debug" if args.verbose else args.log, dry_run=args.dry_run)
    manifest_path = Path(args.manifest_path) if args.manifest_path else workspace / MANIFEST_NAME
    extra_args = _extra_arguments(args.rest)

    try:
        manifest = classify(manifest_path)
        console.debug(f"Loaded {_describe(manifest)} from {manifest_path}")
        entries = aggregate(manifest, args.name)
    except CargoCmdError as exc:
        console.error(str(exc))
        return 1

    console.debug(f"Resolved {len(entries)} command(s) for '{args.name}'")
    if extra_args:
        console.info(f"Appending extra arguments: {' '.join(extra_args)}")

    if args.dry_run:
        console.dry(f"{len(entries)} command(s) would run for '{args.name}'")
        _emit_dry_run_output(entries, extra_args)
        return 0

    return run_commands(entries, extra_args, runner=SubprocessCommandRunner(), console=console)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
