#!/usr/bin/env python3
"""
Factor integers from the command line.

Usage:
    python3 factorise.py 600851475143
    python3 factorise.py --digits 12 --strict 1000000016000000063 "3^40"
"""

import sys

from ecmfactor.cli import main

if __name__ == '__main__':
    sys.exit(main())
