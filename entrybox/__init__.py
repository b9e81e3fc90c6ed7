"""
entrybox
--------
Personal knowledge-capture store: entries, categories and tags persisted
on SQLite or PostgreSQL behind one data access layer.
"""

__version__ = "0.3.0"
