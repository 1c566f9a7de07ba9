"""
relbin — install, verify, link and run a pre-built release binary.
"""

__version__ = "0.1.0"
