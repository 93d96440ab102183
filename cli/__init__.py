"""CLI package for Bookshare"""
from .main import cli

__all__ = ['cli']
