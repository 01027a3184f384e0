"""Allow ``python -m bandlink.cli`` execution."""

import sys

from bandlink.cli.resolve import main

sys.exit(main())
