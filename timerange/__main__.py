"""
Entry point for ``python -m timerange``.
"""

from .cli.app import app

if __name__ == "__main__":
    app()
