from __future__ import annotations

import sys

from organize_pics.organizer import main

if __name__ == "__main__":
    sys.exit(main())
