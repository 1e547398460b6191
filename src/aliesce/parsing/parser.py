# aliesce/parsing/parser.py
from __future__ import annotations

import argparse
import textwrap

from aliesce.constants import DEFAULTS, PROG_NAME
from aliesce.core.models import Settings
from aliesce.notes import NOTE_KEYS, build_notes


def _version_string() -> str:
    from aliesce import __version__

    return f"{PROG_NAME} v{__version__}"


def _notes_epilog(width: int = 80) -> str:
    notes = build_notes(Settings())
    body = "\n\n".join(textwrap.fill(notes[k], width, initial_indent=" ", subsequent_indent=" ") for k in NOTE_KEYS)
    return f"Notes:\n{body}"


def _build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line parser.

    Option defaults are None (not the built-in defaults) so the option
    merger can tell "not given" from "given", and in-file directives can
    take precedence per option.
    """
    p = argparse.ArgumentParser(
        prog=PROG_NAME,
        formatter_class=argparse.RawTextHelpFormatter,
        add_help=False,
        allow_abbrev=False,
        description=(
            f"{PROG_NAME} – save and run scripts in different languages kept in one source file"
        ),
        epilog=_notes_epilog(),
    )

    g_run = p.add_argument_group("Running")
    g_src = p.add_argument_group("Source changes")
    g_misc = p.add_argument_group("Miscellaneous")

    g_run.add_argument(
        "-l",
        "--list",
        action="store_true",
        default=None,
        dest="list_only",
        help=(
            f"print for each script in SOURCE (def. '{DEFAULTS['path_src']}') its number and tag "
            "line content, without saving or running"
        ),
    )
    g_run.add_argument(
        "-o",
        "--only",
        metavar="SUBSET",
        dest="only",
        help=(
            "include only the scripts the numbers of which appear in SUBSET, "
            "comma-separated and/or as ranges, e.g. -o 1,3-5"
        ),
    )
    g_run.add_argument(
        "-d",
        "--dest",
        metavar="DIRNAME",
        dest="path_dir",
        help=f"set the default output dirname ('{DEFAULTS['path_dir']}') to DIRNAME",
    )

    g_src.add_argument(
        "-i",
        "--init",
        action="store_true",
        dest="init",
        help=f"create the source file SOURCE (def. '{DEFAULTS['path_src']}') then exit",
    )
    g_src.add_argument(
        "-p",
        "--push",
        nargs=2,
        metavar=("LINE", "PATH"),
        dest="push",
        help=(
            f"append to SOURCE (def. '{DEFAULTS['path_src']}') LINE, adding the tag head if "
            "none, followed by the content at PATH then exit"
        ),
    )
    g_src.add_argument(
        "-e",
        "--edit",
        nargs=2,
        metavar=("N", "LINE"),
        dest="edit",
        help="update the tag line for script number N to LINE, adding the tag head if none, then exit",
    )

    g_misc.add_argument(
        "--json-logs",
        action="store_true",
        dest="json_logs",
        help="emit log records as JSON lines on stderr",
    )
    g_misc.add_argument(
        "--verbose",
        action="store_true",
        dest="verbose",
        help="log debug messages",
    )
    g_misc.add_argument(
        "-v",
        "--version",
        action="version",
        version=_version_string(),
        help="show name and version number then exit",
    )
    g_misc.add_argument(
        "-h",
        "--help",
        action="help",
        help="show usage, flags available and notes then exit",
    )

    p.add_argument(
        "path_src",
        metavar="SOURCE",
        nargs="?",
        default=None,
        help=f"source file path, also giving the output stem (def. '{DEFAULTS['path_src']}')",
    )
    return p


def _build_directive_parser() -> argparse.ArgumentParser:
    """Build the parser for option lines in the source preface.

    Only run options are accepted; words it does not know are left for the
    caller to ignore so prose notes can share the preface.
    """
    p = argparse.ArgumentParser(
        prog=f"{PROG_NAME} (source)",
        add_help=False,
        allow_abbrev=False,
        exit_on_error=False,
    )
    p.add_argument("-d", "--dest", dest="path_dir")
    p.add_argument("-l", "--list", action="store_true", default=None, dest="list_only")
    p.add_argument("-o", "--only", dest="only")
    return p
