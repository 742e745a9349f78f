"""Main entry point for the fleet event sweep."""

import sys

from fleet_events.cli import main

if __name__ == "__main__":
    sys.exit(main())
