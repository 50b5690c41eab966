from __future__ import annotations

import sys

from pcp.cli._dispatcher import main

if __name__ == "__main__":
    sys.exit(main())
