import sys

from passport_validator.cli import main

if __name__ == "__main__":
    sys.exit(main())
