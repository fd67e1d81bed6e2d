"""Terminal spreadsheet with cell references, formulas and dependency tracking."""

__version__ = "0.1.0"
__all__ = ["__version__"]