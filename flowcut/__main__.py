"""Allow ``python -m flowcut``."""

from flowcut.cli import main

if __name__ == "__main__":
    main()
