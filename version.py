"""
Version information for the Job Application Tracker.

This file is the single source of truth for version numbers.
The Flask app and the health endpoint import from here.
"""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)
