import sys

from history_grouper.main import main

sys.exit(main())
