"""Command-line front-end for windowstats."""

from .main import app, main

__all__ = ['app', 'main']
