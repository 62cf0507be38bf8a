"""Entry point: convert a source image into a multi-size Windows .ico file.

Usage: python main.py [source.png] [output.ico] [--sizes 16,32,48,256]
"""
import sys

from icogen.cli import main


if __name__ == "__main__":
    sys.exit(main())
