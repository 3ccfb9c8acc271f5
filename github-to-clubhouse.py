#!/usr/bin/env python3
"""
GitHub to Clubhouse - Import the issues of a GitHub repository into a
Clubhouse project.

Every issue (pull requests excluded) becomes a story with its comments,
labels, owner and requester. Closed issues land in the project's "done"
state. It is a one-shot, one-way import: running it again creates the
stories again.

Copyright (c) 2025 Michele Tavella <meeghele@proton.me>
Licensed under the MIT License. See LICENSE file for details.

Author: Michele Tavella <meeghele@proton.me>
License: MIT
"""

from __future__ import annotations

import sys
from typing import NoReturn

from argument_parser import parse_arguments
from import_orchestrator import ImportOrchestrator

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1


def main() -> NoReturn:
    if __name__ != "__main__":
        sys.exit(EXIT_EXECUTION_ERROR)

    cfg = parse_arguments()
    orchestrator = ImportOrchestrator(cfg)
    sys.exit(orchestrator.run())


if __name__ == "__main__":
    main()
