"""Development entrypoint for the worldgen map loader."""

from __future__ import annotations

import sys

from worldgen.main import main

if __name__ == "__main__":
    sys.exit(main())
