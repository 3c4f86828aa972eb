"""Allow ``python -m cssfilter``."""

import sys

from cssfilter.cli import main

sys.exit(main())
