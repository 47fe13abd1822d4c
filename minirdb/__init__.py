"""A small relational database engine: paged storage with a buffer pool, and a SQL parser and analyzer."""

__version__ = "0.1.0"