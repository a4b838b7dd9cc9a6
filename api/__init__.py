"""
API layer for the raster transform service
"""
