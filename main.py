"""Run the tool panel from a source checkout."""

from toolpanel.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
