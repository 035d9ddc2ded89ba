"""
elfsize Module Entry Point
===========================

Allows running the CLI via: python -m elfsize
"""

from elfsize.cli import main

if __name__ == "__main__":
    main()
