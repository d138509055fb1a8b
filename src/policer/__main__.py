import sys

from src.policer.cli import main

sys.exit(main())
