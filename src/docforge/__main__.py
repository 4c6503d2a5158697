"""Allow ``python -m docforge``."""

from docforge.cli import app

if __name__ == "__main__":
    app()
