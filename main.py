#!/usr/bin/env python3
"""
main.py - Run the series-sum CLI from a source checkout

    python main.py report mypackage.series:log1p_terms --arg 0.5

Equivalent to the installed `series-sum` command.
"""

import sys
from pathlib import Path

# Add src to path to import series_sum without installing
sys.path.insert(0, str(Path(__file__).parent / "src"))

from series_sum.cli import main as cli_main


if __name__ == "__main__":
    cli_main(sys.argv[1:])
