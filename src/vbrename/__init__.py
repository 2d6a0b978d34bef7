"""Reference indexing and position-exact rename planning for VB6 sources."""

__version__ = "0.1.0"
