#!/usr/bin/env python3
"""DepLock CLI entry point.

Usage:
    python3 deplock.py verify graphs/compile.yaml
    python3 deplock.py write graphs/compile.yaml
    python3 deplock.py show compileClasspath
"""

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that core/engines/cli imports work.
_PROJECT_ROOT = Path(__file__).resolve().parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from cli.main import main

if __name__ == "__main__":
    main()
