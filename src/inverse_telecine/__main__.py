import sys

from inverse_telecine.main import main


sys.exit(main())
