import sys

from httop.cli import main

sys.exit(main())
