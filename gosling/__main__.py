"""Allow ``python -m gosling``."""

from gosling.cli.cli import main

if __name__ == "__main__":
    main()
