"""Entry point for ``python -m fotoroute_core``."""

import sys

from fotoroute_core.cli import main

sys.exit(main())
