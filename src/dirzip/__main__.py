"""dirzip executable module.

Delegates straight to cli.main(), which owns all error handling for both
`python -m dirzip` and the installed console script.
"""

from __future__ import annotations

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
