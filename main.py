#!/usr/bin/env python3
"""
Main script for running hydrostats from the command line.
"""

# Pipeline overview:
# 1) Read a CSV of observations with pandas.
# 2) Drop gap sentinels (NaN, empty cells, -9999) from the selected columns.
# 3) Run the requested analysis (summary table, Mann-Kendall trend,
#    model efficiency or any registered operation).
# 4) Print the results and write tables under output/.

import logging
import os
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler("hydrostats.log", mode="w"),
    ],
)

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from hydrostats.cli import main

if __name__ == "__main__":
    sys.exit(main())
