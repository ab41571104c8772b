#!/usr/bin/env python3
"""Main entry point for the bank simulation package."""

from banksim.scripts.run_simulation import main

if __name__ == '__main__':
    main()
