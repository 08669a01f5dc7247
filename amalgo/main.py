# amalgo/main.py
"""Main entry point for the amalgo CLI application."""

from amalgo.cli.interface import main_cli


def entrypoint():
    """Function to be called by the script defined in pyproject.toml."""
    main_cli(prog_name="amalgo")

if __name__ == '__main__':
    entrypoint()
