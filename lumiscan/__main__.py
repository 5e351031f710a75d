import sys

from lumiscan.cli import main

sys.exit(main())
