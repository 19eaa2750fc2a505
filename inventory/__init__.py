"""Content Inventory: assessment records and the companion RFI list."""

__version__ = "0.1.0"
