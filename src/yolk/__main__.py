import sys

from yolk.cli import main

sys.exit(main())
