"""Allow ``python -m barangay``."""

from barangay.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
