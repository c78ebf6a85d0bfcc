import sys

from intervalsummary.cli import main

sys.exit(main())
