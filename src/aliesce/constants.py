from __future__ import annotations

"""Project-wide constants used across modules.

The tag, signal and placeholder strings are copied into `Settings` once per
invocation; nothing reads them from here after the options are merged.
"""

from typing import Dict

DEFAULTS: Dict[str, str] = {
    "path_src": "src.txt",      # source file path (incl. output stem)
    "path_dir": "scripts",      # output directory name
    "tag_head": "###",
    "tag_tail": "#",
    "sig_stop": "!",
    "plc_path_dir": ">",
    "plc_path_all": ">{}<",     # '{}' is the optional script number position
    "cmd_prog": "bash",
    "cmd_flag": "-c",
}

PROG_NAME: str = "aliesce"
