"""
Warehouse inventory: category index, product collections, stock analysis.
"""

__version__ = "1.0.0"
