import sys

from bytevm.cli import main

sys.exit(main())
