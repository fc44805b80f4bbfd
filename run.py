"""
Task List Runner
================
Run the Task List API from a source checkout without installing it.

Usage:
    python run.py start
    python run.py start --port 8080
    python run.py routes
"""
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from tasklist.cli import main


if __name__ == "__main__":
    sys.exit(main())
