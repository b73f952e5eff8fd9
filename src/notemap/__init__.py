"""notemap — map views over structured notes."""

__version__ = "0.3.0"
