"""Ermöglicht `python -m disk_report`."""

from .scan import main

if __name__ == "__main__":
    main()
