"""
Package entry point.

Allows running the application via:

    python -m tripsheet

This simply forwards execution to tripsheet.cli.main().
"""

from tripsheet.cli import main

if __name__ == "__main__":
    main()
