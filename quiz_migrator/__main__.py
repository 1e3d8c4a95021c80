"""
Module entry point for: python -m quiz_migrator

Allows running the migrator directly as a module:
    python -m quiz_migrator migrate [options]
    python -m quiz_migrator schema [options]
"""

from .cli import cli


def main():
    cli()


if __name__ == "__main__":
    main()
