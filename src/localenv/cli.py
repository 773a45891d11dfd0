"""localenv CLI: commands consumed by the shell hook and by users.

stdout carries only text meant for the shell (check, allow --emit, hook)
or the status report; everything human-facing goes to stderr.
"""

import argparse
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from importlib.resources import files
from pathlib import Path

from localenv import api
from localenv._internal.canonical_json import canonical_dumps
from localenv._internal.log_setup import setup_logging
from localenv.codes import ExitCode, Outcome


def _prompt_confirm(location, text: str) -> bool:
    """Show the file and ask for a y/N answer on stderr/stdin."""
    print(f"Contents of {location.config_path}:", file=sys.stderr)
    print("---", file=sys.stderr)
    print(text.rstrip("\n"), file=sys.stderr)
    print("---", file=sys.stderr)
    print("Allow this file to be executed? [y/N]: ", end="", file=sys.stderr, flush=True)
    response = sys.stdin.readline()
    return response.strip().lower() in ("y", "yes")


def _print_not_trusted(result) -> None:
    print(f"localenv: {result.config_path} is not allowed (new or changed)", file=sys.stderr)
    print("localenv: Run 'eval \"$(localenv allow --emit)\"' to approve and load it", file=sys.stderr)
    print("localenv: File contents:", file=sys.stderr)
    print("---", file=sys.stderr)
    print((result.content or "").rstrip("\n"), file=sys.stderr)
    print("---", file=sys.stderr)


def _print_status(report) -> None:
    print(f"Directory: {report.directory}")
    if report.outcome == Outcome.NO_CONFIG:
        print("Status: No configuration file found")
        return

    print(f"Config: {report.config_path} (depth {report.depth})")
    if report.outcome == Outcome.TRUSTED:
        print(f"Status: Allowed (since {report.record.approved_at})")
        print("\nCommands to execute:")
        for command in report.commands:
            print(f"  {command.describe()}")
        if report.parse_warnings:
            print("\nIgnored lines:")
            for warning in report.parse_warnings:
                print(f"  {warning}")
    elif report.record is not None:
        print("Status: File has changed since it was allowed")
        print("\nRun 'localenv allow' to approve the new contents")
    else:
        print("Status: Not allowed")
        print("\nRun 'localenv allow' to approve it")


def main():
    """Main CLI entry point for localenv commands."""
    # Get version for --version argument (handle PackageNotFoundError)
    try:
        localenv_version = get_version("localenv")
    except PackageNotFoundError:
        localenv_version = "dev"

    parser = argparse.ArgumentParser(
        prog="localenv",
        description="localenv: approval-gated per-directory shell environments"
    )
    parser.add_argument("--version", action="version", version=f"localenv {localenv_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "-d", "--dir",
        dest="directory",
        type=Path,
        default=None,
        help="Directory to operate on (defaults to the current directory)"
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug details to stderr."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "check",
        help="Emit the environment script if the governing file is allowed",
        parents=[parent_parser]
    )

    allow_parser = subparsers.add_parser(
        "allow",
        help="Review and approve the governing configuration file",
        parents=[parent_parser]
    )
    allow_parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Approve without prompting"
    )
    allow_parser.add_argument(
        "--emit",
        action="store_true",
        help="Also print the environment script for immediate evaluation"
    )

    subparsers.add_parser(
        "deny",
        help="Revoke approval for the directory",
        parents=[parent_parser]
    )

    status_parser = subparsers.add_parser(
        "status",
        help="Show whether the directory's configuration is allowed",
        parents=[parent_parser]
    )
    status_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the status report as canonical JSON"
    )

    subparsers.add_parser(
        "hook",
        help="Print the zsh hook script (use: eval \"$(localenv hook)\")"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(ExitCode.FAILURE)

    if args.command == "hook":
        print(files("localenv").joinpath("hook.zsh").read_text(encoding="utf-8"), end="")
        sys.exit(ExitCode.OK)

    setup_logging(verbose=args.verbose)

    try:
        if args.command == "check":
            result = api.check(args.directory)
            if result.outcome == Outcome.NOT_TRUSTED:
                _print_not_trusted(result)
                sys.exit(ExitCode.ATTENTION)
            if result.outcome == Outcome.TRUSTED:
                print(result.script, end="")
            sys.exit(ExitCode.OK)

        elif args.command == "allow":
            confirm = None if args.yes else _prompt_confirm
            result = api.allow(args.directory, confirm=confirm, emit=args.emit)
            if not result.approved:
                print("Aborted.", file=sys.stderr)
                sys.exit(ExitCode.OK)
            print(f"Allowed {result.config_path}", file=sys.stderr)
            if result.script is not None:
                print(result.script, end="")
            sys.exit(ExitCode.OK)

        elif args.command == "deny":
            result = api.deny(args.directory)
            target = result.owning_directory or result.directory
            if result.removed:
                print(f"Denied configuration in {target}", file=sys.stderr)
            else:
                print(f"Nothing to deny in {target}", file=sys.stderr)
            sys.exit(ExitCode.OK)

        elif args.command == "status":
            report = api.status(args.directory)
            if args.json:
                print(canonical_dumps(report.model_dump(mode="json")))
            else:
                _print_status(report)
            sys.exit(ExitCode.OK)

        else:
            parser.print_help()
            sys.exit(ExitCode.FAILURE)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(ExitCode.FAILURE)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(ExitCode.FAILURE)


if __name__ == "__main__":
    main()
