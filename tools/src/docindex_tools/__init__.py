"""Tools for rustdoc search-alias tables and module sidebar indices."""

__version__ = "0.1.0"
