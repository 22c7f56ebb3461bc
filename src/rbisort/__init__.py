"""Sort and group Ruby import statements."""

__version__ = "0.1.0"
