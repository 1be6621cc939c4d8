"""Allow ``python -m prt7_decoder``."""

import sys

from prt7_decoder.main import main


sys.exit(main())
