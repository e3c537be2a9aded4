"""Run with: python -m asciipet"""
import sys

from asciipet.main import main

if __name__ == "__main__":
    sys.exit(main())
