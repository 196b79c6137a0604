"""Demo staff accounts for HMS.

This package seeds a handful of staff accounts for local development,
screenshots and demonstrations. It is not included in production images.

Usage:
    hms users seed
    # or
    python -m hms_demo.seed
"""

__version__ = "0.1.0"
