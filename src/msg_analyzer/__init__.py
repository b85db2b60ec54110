"""msg-analyzer: comparison and structural analysis for financial message text."""

__version__ = "0.1.0"
