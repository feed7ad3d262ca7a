"""
PartFit CLI entry point.

Usage:
    python -m partfit.cli glass <screen.json> <glass.json> [--rule <rule.json>]
    python -m partfit.cli display <target.json> <donor.json>
"""

import sys
from .main import main

if __name__ == "__main__":
    sys.exit(main())
