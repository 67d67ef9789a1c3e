"""Entry point for the API Documentation Builder.

Delegates to the Click command group, which loads configuration and
initializes logging.
"""

from apidoc.cli.commands import apidoc


def main() -> None:
    """Launch the CLI."""
    apidoc()


if __name__ == "__main__":
    main()
