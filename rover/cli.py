"""CLI entry point for rover."""

from __future__ import annotations

import argparse
import os
import sys

from rover.commands.upload import run_upload
from rover.config import OPTIONAL_ENV_VARS, REQUIRED_ENV_VARS

_UPLOAD_EPILOG = "\n".join(
    [
        "Environment variables:",
        "",
        "  The upload command requires these environment variables:",
        "",
        *(f"  - {name}" for name in REQUIRED_ENV_VARS),
        "",
        "  Optionally specify a bucket prefix or a session token:",
        "",
        *(f"  - {name}" for name in OPTIONAL_ENV_VARS),
    ]
)


class CliApp:
    """Command-line interface for rover."""

    def __init__(self) -> None:
        """Initialize parser and command definitions."""
        self._parser = self._build_parser()

    def _build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="rover",
            description="Diagnostic archive utilities.",
        )
        subparsers = parser.add_subparsers(dest="command", required=True)

        self._add_upload_parser(subparsers)

        return parser

    def _add_upload_parser(
        self,
        subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
    ) -> None:
        """Add the ``upload`` command parser."""
        parser = subparsers.add_parser(
            "upload",
            help="Uploads rover archive file to S3 bucket.",
            description="Upload an archive file to S3 bucket.",
            epilog=_UPLOAD_EPILOG,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        parser.add_argument(
            "-file",
            "--file",
            dest="file",
            type=str,
            default=None,
            help=(
                "Archive filename to upload "
                "(default: upload.archive_file from config, 'rover.zip')."
            ),
        )

    def _run_command(self, args: argparse.Namespace) -> int:
        """Dispatch parsed args to the target command implementation."""
        if args.command == "upload":
            return run_upload(args, dict(os.environ))
        sys.exit(f"Unknown command: {args.command}")

    def run(self, argv: list[str] | None = None) -> int:
        """Run the CLI with the given arguments and return the exit status."""
        args = self._parser.parse_args(argv)
        return self._run_command(args)


def main(argv: list[str] | None = None) -> None:
    """Entry point for setuptools/CLI wrappers."""
    sys.exit(CliApp().run(argv))


if __name__ == "__main__":
    main()
