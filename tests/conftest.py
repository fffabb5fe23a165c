import os
import sys

# Ensure the project root is importable from the tests dir
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)
