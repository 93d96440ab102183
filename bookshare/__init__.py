"""Bookshare: book sharing with like-driven chat pairing"""
__version__ = "0.1.0"
