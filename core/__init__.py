"""
Core shared components for the StoreOps platform.

This package holds the exception hierarchy and the small utilities shared by
every app (request parameter parsing, time formatting).
"""

__version__ = "1.0.0"
