"""Storage and export layer.

This package reads legacy template rows, upserts converted designs into
the destination table, and exports stored designs to JSON files.
"""
