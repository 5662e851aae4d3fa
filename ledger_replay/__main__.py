import sys

from ledger_replay.cli import main

sys.exit(main())
