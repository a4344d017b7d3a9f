"""
Tile rasterization.
"""
