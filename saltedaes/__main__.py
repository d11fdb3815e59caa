# saltedaes/__main__.py

import sys

from saltedaes.cli import main

sys.exit(main())
