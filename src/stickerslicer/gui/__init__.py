"""
Desktop interface for Sticker Slicer.
"""
