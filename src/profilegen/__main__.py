"""Entry point for running profilegen as a module.

Usage:
    python -m profilegen [command] [options]

Example:
    python -m profilegen render template.yaml profile.yaml --format summary
    python -m profilegen validate template.yaml profile.yaml
"""

from profilegen.cli import app

if __name__ == "__main__":
    app()
