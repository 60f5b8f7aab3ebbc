"""Allow running the simulator with ``python -m citysim``."""

import sys

from .main import main


if __name__ == '__main__':
    sys.exit(main())
