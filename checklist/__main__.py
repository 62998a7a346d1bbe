import sys

from checklist.app import main

sys.exit(main())
