import sys

from mehl.cmdline import main

sys.exit(main())
