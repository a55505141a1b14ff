"""Legacy template conversion.

This package parses legacy template documents and converts them into
normalized designs with typed layers.
"""
