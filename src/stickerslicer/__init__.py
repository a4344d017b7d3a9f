"""
Sticker Slicer - split a sticker sheet into a grid of individual images.
"""

__version__ = "1.0.0"
