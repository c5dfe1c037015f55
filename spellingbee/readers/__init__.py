"""
Readers Package
Input readers for the spelling bee word database.

Usage:
    from spellingbee.readers.excel_reader import WorkbookRowSource, parse_round_key
"""

__all__ = ["excel_reader"]
