import sys

from kubedemo.cli.entrypoint import main

sys.exit(main())
