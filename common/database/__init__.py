"""
Database module - async MongoDB connection manager (Motor).
"""

from common.database.mongodb import MongoDB

__all__ = ["MongoDB"]
