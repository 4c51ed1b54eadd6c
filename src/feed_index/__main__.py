import sys

from feed_index.cli import main

sys.exit(main())
