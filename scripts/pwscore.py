#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path


def _bootstrap_repo_path() -> None:
    # run from a checkout without installing: put the directory holding pwscore/ on sys.path
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "pwscore").is_dir():
            root = str(candidate)
            if root not in sys.path:
                sys.path.insert(0, root)
            return


_bootstrap_repo_path()

from pwscore.cli.pwscore_cli import main


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
