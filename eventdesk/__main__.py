import sys

from eventdesk.main import main

sys.exit(main())
