import sys

from mrr.cli import main

sys.exit(main())
