"""
Legacy Sheet - OCR text to genealogy sheet records
"""

__version__ = '0.3.0'
