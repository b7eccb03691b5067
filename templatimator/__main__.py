"""Allow ``python -m templatimator``."""

import sys

from templatimator.cli import main

if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
