"""
Package entry point.

Allows running the application via:

    python -m explorecourses

This simply forwards execution to explorecourses.cli.main().
"""

from explorecourses.cli import main

if __name__ == "__main__":
    main()
