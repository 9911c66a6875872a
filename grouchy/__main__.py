"""Entry point for running the client as a module.

Usage:
    python -m grouchy
"""

from grouchy.cli.main import run

if __name__ == "__main__":
    run()
