#!/usr/bin/env python3
"""
ASMODE CLI
----------
Command-line front end over the editing core:

  asmode show FILE     per-line classification, indentation and highlighting
  asmode indent FILE   re-layout the file in canonical columns (preview/--write)
  asmode check FILE    exit 1 when any line is off the canonical layout

Author: Asmode Team
Date: 2026-10-18
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel

from asmode.cli.formatter import AsmFormatter
from asmode.core.config import SessionConfig, load_config
from asmode.core.errors import ConfigurationFault
from asmode.core.models import CommentStyle
from asmode.editing.session import EditSession

# Global console for consistent styling across the application
console = Console()
logger = logging.getLogger("asmode.cli")

EXIT_OK, EXIT_MISALIGNED, EXIT_ERROR = 0, 1, 2


class AsmodeCLI:
    """
    CLI wrapper that translates user commands into EditSession calls.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="asmode",
            description="asmode - Assembly line classification and column layout",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.formatter = AsmFormatter()
        self._setup_args()

    def _setup_args(self):
        """Configures the command-line flags and subcommands."""
        self.parser.add_argument("-v", "--version", action="version", version="asmode v0.1.0")
        self.parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        common = argparse.ArgumentParser(add_help=False)
        common.add_argument("path", help="Assembly source file")
        common.add_argument("--config", help="YAML settings file")
        common.add_argument("--style", choices=[s.config_name for s in CommentStyle],
                            help="Comment style (overrides the settings file)")
        common.add_argument("--comment-column", type=int, help="Trailing comment column")
        common.add_argument("--tab-stops", help="Comma separated tab stop columns, e.g. 16,24")

        subparsers.add_parser("show", parents=[common], help="Show line classification")

        indent_parser = subparsers.add_parser("indent", parents=[common], help="Re-layout a file")
        indent_parser.add_argument("--write", action="store_true", help="Rewrite the file in place")
        indent_parser.add_argument("--diff", action="store_true", help="Show the layout diff")

        subparsers.add_parser("check", parents=[common], help="Fail if a file is off layout")

    def _build_session(self, args: argparse.Namespace) -> EditSession:
        """Settings file first, then command-line overrides."""
        settings = load_config(args.config) if args.config else SessionConfig()
        options = {}
        if args.style:
            options["commentStyle"] = args.style
        if args.comment_column is not None:
            options["commentColumn"] = args.comment_column
        if args.tab_stops:
            try:
                options["tabStops"] = [int(s) for s in args.tab_stops.split(",") if s.strip()]
            except ValueError:
                raise ConfigurationFault("tabStops", args.tab_stops, "expected integers")

        session = EditSession(settings)
        if options:
            logger.debug(f"Command-line overrides: {options}")
            session.configure(**options)
        return session

    def _atomic_write(self, target_path: Path, content: str):
        temp_file = target_path.with_suffix(target_path.suffix + ".asmode.tmp")
        try:
            temp_file.write_text(content, encoding="utf-8")
            os.replace(temp_file, target_path)
        except OSError as e:
            if temp_file.exists():
                temp_file.unlink()
            raise IOError(f"Atomic write failed: {e}")

    def _misaligned(self, original: str, laid_out: str) -> List[int]:
        return [
            i for i, (old, new) in enumerate(zip(original.split("\n"), laid_out.split("\n")), 1)
            if old.rstrip() != new
        ]

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

        if not args.command:
            self.parser.print_help()
            return EXIT_OK

        path = Path(args.path)
        try:
            session = self._build_session(args)
            text = path.read_text(encoding="utf-8-sig").replace("\r\n", "\n")
        except ConfigurationFault as e:
            console.print(f"[bold red]Configuration error:[/bold red] {e}")
            return EXIT_ERROR
        except OSError as e:
            console.print(f"[bold red]Error:[/bold red] cannot read '{args.path}': {e}")
            return EXIT_ERROR

        trailing_newline = text.endswith("\n")
        body = text[:-1] if trailing_newline else text
        reports = session.report(body)
        laid_out = session.layout(body)
        misaligned = self._misaligned(body, laid_out)

        if args.command == "show":
            self.formatter.show_report(reports, path.name)
            self.formatter.print_summary(path.name, reports, misaligned)
            return EXIT_OK

        if args.command == "check":
            self.formatter.print_summary(path.name, reports, misaligned)
            for line_no in misaligned:
                console.print(f"[yellow]{path.name}:{line_no}[/yellow] off layout")
            return EXIT_MISALIGNED if misaligned else EXIT_OK

        # indent
        if args.diff or not args.write:
            self.formatter.display_diff(body, laid_out, path.name)
        if args.write and misaligned:
            try:
                self._atomic_write(path, laid_out + ("\n" if trailing_newline else ""))
            except IOError as e:
                console.print(f"[bold red]Error:[/bold red] {e}")
                return EXIT_ERROR
            console.print(Panel.fit(f"[green]Rewrote {len(misaligned)} line(s) in {path.name}[/green]",
                                    border_style="green"))
        return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Application entry point with interrupt handling."""
    try:
        return AsmodeCLI().run(argv)
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
