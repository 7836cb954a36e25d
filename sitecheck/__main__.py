import sys

from sitecheck.cli import main

sys.exit(main())
