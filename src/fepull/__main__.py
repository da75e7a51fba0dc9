"""Allow ``python -m fepull``."""

from fepull.cli.app import main

if __name__ == "__main__":
    main()
