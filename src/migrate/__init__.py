"""Migration orchestration.

This package drives conversion batches from the legacy row source into
the destination table and exports stored designs.
"""
