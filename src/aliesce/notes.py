from __future__ import annotations

"""Help notes and the template written by '--init'.

Both are generated from the effective settings so the text always shows
the markers actually in use.
"""

from typing import Dict, List

from aliesce.constants import PROG_NAME
from aliesce.core.models import Settings

NOTE_KEYS: List[str] = ["file", "line", "main", "plus", "pipe"]


def build_notes(settings: Settings) -> Dict[str, str]:
    s = settings
    return {
        "file": (
            f"The default source path is '{s.path_src}'. Each script in the file is preceded by "
            f"a tag line begun with the tag head ('{s.tag_head}') and an optional label and "
            f"tail ('{s.tag_tail}'):"
        ),
        "line": (
            f"{s.tag_head}[ label {s.tag_tail}] <OUTPUT EXTENSION / PATH: "
            f"[[[.../]dirname/]stem.]ext> <COMMAND>"
        ),
        "main": (
            f"Each script is saved with the default output directory ('{s.path_dir}'), source "
            f"file stem and OUTPUT EXTENSION, or a PATH overriding stem and/or directory, then "
            f"the COMMAND is run with the save path appended. The '{s.plc_bare}' placeholder can "
            f"be used in the COMMAND to override path position and have the COMMAND passed to "
            f"'{s.cmd_prog} {s.cmd_flag}'; where a script no. is included "
            f"('{s.plc_head}n{s.plc_tail}') the save path of that script is applied."
        ),
        "plus": (
            f"The '{s.sig_stop}' signal can be used before the EXTENSION etc. to avoid both the "
            f"save and run stages, or before the COMMAND to avoid run only. The "
            f"'{s.plc_path_dir}' placeholder can be used in a full PATH to denote the default or "
            f"overridden output directory name."
        ),
        "pipe": (
            f"One or more file paths can be piped to {PROG_NAME} to append the content at each "
            f"to the source as a script, auto-preceded by a tag line with the signal pair "
            f"'{s.sig_stop} {s.sig_stop}', then exit."
        ),
    }


def init_template(settings: Settings) -> str:
    """Return the content of a new source file.

    The documented tag line is indented so it is not taken for a tag line.
    """
    notes = build_notes(settings)
    return (
        f"<any arguments to {PROG_NAME} (run '{PROG_NAME} --help' for options)>\n\n"
        "Notes on source file format:\n\n"
        f"{notes['file']}\n\n{notes['main']}\n\n{notes['plus']}\n\n"
        "Appending scripts via stdin:\n\n"
        f"{notes['pipe']}\n\n"
        "Tag line and script section:\n\n"
        f"  {notes['line']}\n\n  <script>\n"
    )
