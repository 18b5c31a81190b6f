"""Entry point for running vsonline as a module.

This allows running the application with:
    python -m vsonline [OPTIONS] COMMAND [ARGS]
"""

from vsonline.cli import app

if __name__ == "__main__":
    app()
