"""Utility modules for gitools."""
