"""
ZapGo - command resolution engine for a quick-launcher palette.
"""

__version__ = "0.1.0"
