"""Allow running grph as ``python -m grph``."""

import sys

from grph.cli import main

sys.exit(main())
