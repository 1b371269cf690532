"""Allow ``python -m ldmlconverter``."""

import sys

from ldmlconverter.cli import main

sys.exit(main())
