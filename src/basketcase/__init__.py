"""basketcase - CVS/Subversion-like usage of ClearCase's cleartool."""

__version__ = "1.0.0"
