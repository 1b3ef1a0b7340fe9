#!/usr/bin/env python3
"""PomoFocus entry point.

Run with:
    python main.py
    python -m pomofocus
"""

from pomofocus.__main__ import main


if __name__ == "__main__":
    main()
