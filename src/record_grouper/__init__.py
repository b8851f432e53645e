"""Group delimited records into connected components of shared field values."""

__version__ = "0.1.0"
