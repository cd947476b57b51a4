"""Allow ``python -m sforg_browser``."""

import sys

from sforg_browser.cli import main

if __name__ == "__main__":
    sys.exit(main())
