import sys

from kappa.cmdline import main

sys.exit(main())
