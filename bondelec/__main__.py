import sys

from bondelec.cli import main

sys.exit(main())
