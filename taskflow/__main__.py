"""Allow ``python -m taskflow``."""

from taskflow.server import main

if __name__ == "__main__":
    main()
