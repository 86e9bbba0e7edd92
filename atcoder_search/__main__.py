import sys

from atcoder_search.cli import main

sys.exit(main())
