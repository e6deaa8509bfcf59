"""
CLI Commands.

Organized by API area.
"""

from adbcli.cli.commands.dbfs import app as dbfs_app
from adbcli.cli.commands.jobs import app as job_app
from adbcli.cli.commands.system import app as system_app
from adbcli.cli.commands.workspace import app as workspace_app

__all__ = [
    "dbfs_app",
    "job_app",
    "system_app",
    "workspace_app",
]
