"""Entry point for ``python -m minideploy``."""

from .cli.main import app

if __name__ == "__main__":
    app()
