#!/usr/bin/env python3
"""
Infinite Grid launcher script.

Run this from the project root to start the grid:

    $ python run_infinigrid.py path/to/images
"""

from infinigrid.run_gui import main

if __name__ == '__main__':
    main()
