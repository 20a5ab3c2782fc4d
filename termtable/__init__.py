"""TermTable — terminology workbook normalisation and search."""

__version__ = "1.0.0"
