"""Command groups for the Bookshare CLI"""
