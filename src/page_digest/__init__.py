"""
Page Digest - five-point summaries of web articles from a hosted completion model.
"""

__version__ = "0.1.0"
