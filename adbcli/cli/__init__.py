"""
CLI Module.

Command-line client built with Typer for the Databricks REST API.

Architecture:
- CLI is a thin presentation layer
- All scheduling and execution happens in the remote service
- CLI calls the service via HTTP (httpx)

Usage:
    adbcli --help
    adbcli job create -n nightly -npath /Users/me/etl -nw 2 --wait
    adbcli dbfs upload ./data.csv dbfs:/tmp/data.csv
"""
