"""Allow ``python -m ipldsel``."""

from ipldsel.cli.main import main

if __name__ == "__main__":
    main()
