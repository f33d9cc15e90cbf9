"""Allow running as ``python -m pokedex_browser``."""

import sys

from pokedex_browser.app import main

if __name__ == "__main__":
    sys.exit(main())
