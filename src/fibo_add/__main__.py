import sys

from fibo_add.cli import main

sys.exit(main())
