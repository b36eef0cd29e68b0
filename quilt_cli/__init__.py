"""
Quilt API client.

Command-line access to Quilt containers, volumes and terminal sessions
over the Quilt HTTP API.
"""

__version__ = "0.1.0"
