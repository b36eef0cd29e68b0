#!/usr/bin/env python3
"""
Quilt API Client CLI.

Development entry point; the installed console script is `quilt`.

Usage:
    python cli.py --help
    python cli.py health
    python cli.py list running
    python cli.py --debug exec <id> "ls -la"

Environment:
    QUILT_API_URL   API base URL (default https://backend.quilt.sh)
    QUILT_TOKEN     JWT auth (Authorization: Bearer ...)
    QUILT_API_KEY   API key auth (X-Api-Key: ...)
    QUILT_CONFIG    Settings file (default ~/.config/quilt/settings.yaml)
"""

from quilt_cli.cli.app import main

if __name__ == "__main__":
    main()
