"""Main entry point when executing skillbridge as a package.

This allows running the package using python -m skillbridge.
"""

from skillbridge.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
