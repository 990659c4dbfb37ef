"""Entry point for 'python -m gridbase'."""

from gridbase.cli import main

if __name__ == "__main__":
    main()
