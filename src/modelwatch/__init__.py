"""modelwatch - poll model catalogs and report additions and removals."""

__version__ = "2.0.0"
