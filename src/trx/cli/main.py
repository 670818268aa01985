"""Command-line interface for trx.

This module provides the command-line interface for trx, which lists a directory
as a tree while honoring hidden-file rules, glob patterns and .gitignore files.
It handles command-line argument parsing, output writing and signal management
for graceful interruption handling.

Signal Handling Notes:
    - SIGPIPE: Handled when the output pipe is closed (e.g., when piping to `head`)
      on Unix-like systems
    - SIGINT: Ctrl+C stops a running scan between two entries
    Both cases ensure proper cleanup and appropriate exit codes.

Exit Codes:
    0: Entries were listed
    1: Runtime error during execution
    2: Command-line syntax error or malformed pattern
    3: No entry below the root matched
    126: Permission denied on the root directory
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # List a project, respecting its .gitignore files
    $ trx -g /path/to/project

    # Display version information
    $ trx --version
"""

import logging
import sys

from trx.cli.argparser import build_format_options, build_search_options, create_parser, validate_args
from trx.cli.safe_writer import SafeWriter
from trx.cli.signal_handler import setup_signal_handling, signal_handler
from trx.exceptions import ScanCancelled
from trx.file_system_tree.permission_action import PermissionAction
from trx.trx import Trx

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_EMPTY = 3
EXIT_PERMISSION = 126
EXIT_SIGINT = 130
EXIT_SIGPIPE = 141


def main() -> None:
    """Main entry point for the trx command-line interface.

    Exit codes:
        0: Entries were listed
        1: Runtime error during execution
        2: Command-line syntax error or malformed pattern
        3: No entry below the root matched
        126: Permission denied on the root directory
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()
    logging.basicConfig(format="%(levelname)s: %(message)s")

    # argparse calls sys.exit(2) for argument errors or sys.exit(0) for --version
    parser = create_parser()
    args = parser.parse_args()

    try:
        validate_args(args)
        search_options = build_search_options(args)
        format_options = build_format_options(args, is_terminal=args.output is None and sys.stdout.isatty())
    except ValueError as e:
        # Includes PatternError: malformed patterns are reported before any scanning
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_USAGE)

    try:
        listing = Trx(
            args.directory,
            search_options=search_options,
            format_options=format_options,
            output_format=args.format,
            prune=args.prune,
            permission_action=PermissionAction(args.permission_action),
            cancel_event=signal_handler.sigint_received,
        )

        output_file = args.output if args.output else sys.stdout.fileno()

        with SafeWriter(output_file) as safe_writer:
            try:
                safe_writer.write(listing.render())

                if args.summary in ("stdout", "file"):
                    safe_writer.write("\n" + listing.summary() + "\n")
                elif args.summary == "stderr":
                    print(listing.summary(), file=sys.stderr)

            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager

    except ScanCancelled:
        sys.exit(EXIT_SIGINT)
    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_PERMISSION)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(EXIT_ERROR)

    # Handle exit codes based on received signals
    if signal_handler.sigpipe_received.is_set():
        sys.exit(EXIT_SIGPIPE)
    elif signal_handler.sigint_received.is_set():
        sys.exit(EXIT_SIGINT)

    if listing.is_empty:
        sys.exit(EXIT_EMPTY)
    sys.exit(EXIT_OK)


if __name__ == "__main__":
    main()
