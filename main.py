#!/usr/bin/env python3
"""
Passport Validator — Entry Point
================================

Usage:
    python main.py passports.txt --mode simplified

See passport_validator.cli for the full option list.
"""

import sys

from passport_validator.cli import main

if __name__ == "__main__":
    sys.exit(main())
