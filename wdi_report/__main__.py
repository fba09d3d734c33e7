import sys

from wdi_report.cli import main

sys.exit(main())
