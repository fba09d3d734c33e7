"""
wdi_report - World Development Indicators report builder.

Loads a World-Bank-style CSV of country indicator time series and answers
aggregate questions over it.
"""

__version__ = "0.1.0"
