"""
CLI Client Module.

Command-line client built with Typer for the Quilt container API.

Architecture:
- CLI is a thin presentation layer
- All container, volume and session logic lives in the server
- CLI calls the API via HTTP (httpx), one round-trip per command
- Configuration is passed explicitly through CliState

Usage:
    quilt --help
    quilt health
    quilt list
    quilt exec <id> "ls -la"
"""
