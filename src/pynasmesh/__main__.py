import sys

from pynasmesh.cli import main

sys.exit(main())
