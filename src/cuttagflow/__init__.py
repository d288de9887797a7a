"""CutTagFlow: Cut&Tag analysis with spike-in normalization."""

from cuttagflow.__version__ import __version__

__all__ = ["__version__"]
