# Path: morphdict/__main__.py
"""Allow running as: python -m morphdict"""

import sys

from .main import main

sys.exit(main())
