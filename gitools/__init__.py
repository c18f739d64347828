"""
gitools - keyboard-driven git client with a two-level command palette
"""

__version__ = "0.3.0"
