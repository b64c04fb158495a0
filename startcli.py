"""Small wrapper to run the Resumefit CLI with `python startcli.py ...`.

This forwards all command-line arguments to the `resumefit.cli.main`
entry point so you can run the CLI from the repository root without
installing the package or using `python -m`.
"""
from __future__ import annotations

import sys

from resumefit.cli import main


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
