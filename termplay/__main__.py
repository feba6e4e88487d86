import sys

from termplay.frontend.cli import main

sys.exit(main())
