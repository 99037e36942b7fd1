"""
SMS Transaction Extractor

Structured type, amount, description and fraud flag from bank and UPI SMS.
"""

__version__ = "1.0.0"
