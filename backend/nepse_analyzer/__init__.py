"""
NEPSE Analyzer

Daily technical-indicator engine (SMA / EMA, Wilder RSI, MACD) and
composite buy/sell scoring for NEPSE-listed symbols.
"""

__version__ = "0.1.0"
