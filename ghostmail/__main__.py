import sys

from ghostmail.cli import main

sys.exit(main())
