"""REST layer for bookshare"""
