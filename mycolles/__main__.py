"""
Package entry point.

Allows running the application via:

    python -m mycolles

This simply forwards execution to mycolles.cli.main().
"""

from mycolles.cli import main

if __name__ == "__main__":
    main()
