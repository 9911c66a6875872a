"""Console front end."""

from grouchy.cli.main import repl, run

__all__ = ["repl", "run"]
