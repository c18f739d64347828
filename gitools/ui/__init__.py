"""Textual front end for gitools."""

from .app import GitoolsApp, build_engine, translate_key

__all__ = ["GitoolsApp", "build_engine", "translate_key"]
