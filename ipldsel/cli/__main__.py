#!/usr/bin/env python3
"""Entry point for the ipldsel CLI when run as python -m ipldsel.cli."""

if __name__ == "__main__":
    from ipldsel.cli.main import main

    main()
