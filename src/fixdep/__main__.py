"""Allow ``python -m fixdep``."""

from fixdep.cli import main

raise SystemExit(main())
