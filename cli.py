#!/usr/bin/env python3
"""
Azure Databricks CLI.

Entry script for running from a source checkout. When installed, the same
application is available as the `adbcli` command.

Usage:
    python cli.py --help
    python cli.py job create --help
    python cli.py dbfs ls dbfs:/
"""

import sys
from pathlib import Path

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from adbcli.cli.main import app  # noqa: E402

if __name__ == "__main__":
    app()
