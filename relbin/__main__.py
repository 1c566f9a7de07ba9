"""
relbin module entry point.

Usage:
    python -m relbin --help
"""

from relbin.main import cli

if __name__ == "__main__":
    cli()
