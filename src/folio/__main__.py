"""Allow ``python -m folio``."""

from folio.cli import main

if __name__ == "__main__":
    main()
