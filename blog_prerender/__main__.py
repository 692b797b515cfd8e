import sys

from .prerender import main

sys.exit(main())
