"""
Package entry point.

Allows running the scrapers via:

    python -m duscrape

This simply forwards execution to duscrape.cli.main().
"""

from duscrape.cli import main

if __name__ == "__main__":
    main()
