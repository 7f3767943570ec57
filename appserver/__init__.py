"""
Application server: realms and user profiles behind a generic repository layer.
"""

__version__ = "1.0.0"
