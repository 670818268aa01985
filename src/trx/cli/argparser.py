"""Command-line argument parsing for trx.

This module defines the command-line interface for trx, handling argument
parsing, validation, and translation of arguments into search and format
options.
"""

import argparse
from pathlib import Path

from trx import __version__
from trx.exclusion_rules.glob_pattern import compile_patterns
from trx.file_system_tree.search_options import SearchOptions
from trx.output_strategies.format_options import FormatOptions
from trx.trx import OUTPUT_FORMATS


def non_negative_int(value: str) -> int:
    """Argparse type for depth limits."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value!r}")
    return number


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with trx's options.
    """
    description = """
    trx: a tree command that understands .gitignore files.

    Lists the contents of a directory as a tree, applying hidden-file rules,
    include/exclude glob patterns and, optionally, the .gitignore files found
    along the way. Rules from a .gitignore apply to its directory and everything
    below it; "!pattern" lines reinclude entries that other rules exclude.
    """

    epilog = """
    Examples:
      # List the current directory
      trx

      # Respect .gitignore files and show hidden entries
      trx -g -a /path/to/project

      # Only Python files, at most two levels deep, without empty directories
      trx -P "*.py" -L 2 --prune /path/to/project

      # Exclude build output and node_modules
      trx -I "build/" -I node_modules /path/to/project

      # Follow symlinks without leaving the filesystem
      trx -l -x /path/to/project

      # JSON or HTML output written to a file
      trx --format json -o tree.json /path/to/project
      trx --format html --links -o tree.html /path/to/project

    Exit codes:
      0    entries were listed
      1    runtime error
      2    invalid command line or pattern
      3    no entry matched
      126  root directory not readable
      130  interrupted (Ctrl+C)
      141  broken pipe
    """

    parser = argparse.ArgumentParser(
        prog="trx",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"trx {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=Path("."),
        help="The directory to list (default: current directory).",
    )

    selection = parser.add_argument_group("selection")
    selection.add_argument("-a", "--all", action="store_true", help="Show hidden entries (names starting with '.').")
    selection.add_argument("-d", "--dirs-only", action="store_true", help="List directories only.")
    selection.add_argument(
        "-l", "--follow-symlinks", action="store_true", help="Follow symbolic links to directories and files."
    )
    selection.add_argument(
        "-x",
        "--one-file-system",
        action="store_true",
        help="Only follow symbolic links whose target is on the same filesystem as the root.",
    )
    selection.add_argument(
        "-L", "--level", type=non_negative_int, metavar="N", help="Descend at most N levels below the root."
    )
    selection.add_argument(
        "-g", "--gitignore", action="store_true", help="Exclude entries matched by .gitignore files."
    )
    selection.add_argument(
        "-P",
        "--pattern",
        action="append",
        default=[],
        metavar="GLOB",
        help="Only list files matching GLOB (can be specified multiple times).",
    )
    selection.add_argument(
        "-I",
        "--ignore",
        action="append",
        default=[],
        metavar="GLOB",
        help="Do not list entries matching GLOB (can be specified multiple times).",
    )
    selection.add_argument("--ignore-case", action="store_true", help="Match all patterns case-insensitively.")
    selection.add_argument("--prune", action="store_true", help="Remove directories that end up empty.")

    output = parser.add_argument_group("output")
    output.add_argument("-f", "--full-path", action="store_true", help="Print the full path of each entry.")
    output.add_argument("-Q", "--quote", action="store_true", help="Quote names in double quotes.")
    output.add_argument(
        "-F", "--classify", action="store_true", help="Append '/' to directories, '*' to executables, '@' to links."
    )
    output.add_argument("--no-indent", action="store_true", help="Print names without tree connectors.")
    output.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Colorize names by type (default: auto, when writing to a terminal).",
    )
    output.add_argument(
        "--format", choices=list(OUTPUT_FORMATS), default="text", help="Output format (default: text)."
    )
    output.add_argument("--links", action="store_true", help="Render names as hyperlinks (HTML output only).")
    output.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    output.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout", "file"],
        help="Print a directory/file count. Valid destinations: stderr, stdout, file (requires -o)",
    )
    output.add_argument(
        "--permission-action",
        choices=["ignore", "warn"],
        default="ignore",
        help="How to report unreadable entries, which are always skipped (default: ignore).",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.summary == "file" and not args.output:
        raise ValueError("--summary=file requires -o/--output to be specified")
    if args.links and args.format != "html":
        raise ValueError("--links requires --format html")


def build_search_options(args: argparse.Namespace) -> SearchOptions:
    """Translate parsed arguments into SearchOptions.

    Raises:
        PatternError: If a -P/-I pattern is malformed.
    """
    return SearchOptions(
        show_hidden=args.all,
        dirs_only=args.dirs_only,
        follow_symlinks=args.follow_symlinks,
        stay_on_fs=args.one_file_system,
        max_depth=args.level,
        use_ignore_files=args.gitignore,
        positive_patterns=compile_patterns(args.pattern, case_insensitive=args.ignore_case),
        negative_patterns=compile_patterns(args.ignore, case_insensitive=args.ignore_case),
        case_insensitive=args.ignore_case,
    )


def build_format_options(args: argparse.Namespace, is_terminal: bool) -> FormatOptions:
    """Translate parsed arguments into FormatOptions.

    Args:
        args: Parsed command-line arguments.
        is_terminal: Whether the output goes to a terminal (for --color auto).
    """
    if args.color == "always":
        colorize = True
    elif args.color == "never":
        colorize = False
    else:
        colorize = is_terminal and args.format == "text"

    return FormatOptions(
        colorize=colorize,
        decorate=args.classify,
        full_paths=args.full_path,
        indent=not args.no_indent,
        quote_names=args.quote,
        emit_links=args.links,
    )
