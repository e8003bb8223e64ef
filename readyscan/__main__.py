"""Allow ``python -m readyscan`` to behave like the CLI entry point."""

from readyscan.cli import cli

if __name__ == "__main__":  # pragma: no cover
    cli()
