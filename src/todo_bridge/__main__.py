"""Entry point – ``python -m todo_bridge``."""
import sys

from todo_bridge.cli import main

sys.exit(main())
