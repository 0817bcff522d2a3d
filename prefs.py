"""Command line entry point: `python prefs.py --app com.example.App list`."""
import sys

from prefs_lib.cli import main

if __name__ == "__main__":
    sys.exit(main())
