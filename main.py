#!/usr/bin/env python3
"""
Entry point for the Calculator application.

    python main.py            # warnings only
    python main.py --debug    # log every engine action

The log level can also be set with CALCULATOR_LOG_LEVEL (e.g. INFO, DEBUG).
"""
import argparse
import logging
import os
import sys
from pathlib import Path

# Optional: ensure current repo root is on sys.path so relative imports work
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(debug: bool = False):
    level_name = "DEBUG" if debug else os.environ.get("CALCULATOR_LOG_LEVEL", "WARNING")
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        raise SystemExit(f"Invalid log level: {level_name}")
    logging.basicConfig(level=level, format=LOG_FORMAT)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Basic desktop calculator")
    parser.add_argument("--debug", action="store_true", help="log every engine action")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.debug)

    # Tk is only needed for the window; import it late so --help works headless
    from frontend.gui import CalculatorGUI

    app = CalculatorGUI()
    app.mainloop()


if __name__ == "__main__":
    main()
