"""Allow running as python -m kitgen."""

import sys

from kitgen.presentation.cli import main

sys.exit(main())
