import sys

from gdriveclient.cli import main

sys.exit(main())
