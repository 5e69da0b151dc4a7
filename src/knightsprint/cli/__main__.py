"""Allow ``python -m knightsprint.cli``."""

import sys

from knightsprint.cli.app import main

sys.exit(main())
