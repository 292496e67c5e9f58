"""kbchat - knowledge-grounded chat prompt assembly."""

__version__ = "0.1.0"
