"""Legacy asset resolution.

This package maps legacy image references onto the flat converted-asset
store and copies files into it with filename-based deduplication.
"""
