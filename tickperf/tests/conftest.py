import os
import sys

import matplotlib

# Headless backend for chart tests
matplotlib.use("Agg")

# Get the repository root (package parent)
PKG_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PKG_ROOT not in sys.path:
    sys.path.insert(0, PKG_ROOT)
