"""
Azure Databricks command-line client.

- core/: Configuration, logging, exceptions
- schemas/: Request and response models for the REST API
- client/: Async HTTP clients, one per API area (dbfs, jobs, workspace)
- cli/: Typer command groups and option builders
"""

__version__ = "0.1.0"
