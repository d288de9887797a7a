"""Version information for CutTagFlow."""

__version__ = "0.3.0"
__license__ = "GPL-2.0"
__description__ = "Checkpointed Cut&Tag analysis pipeline with spike-in normalization"
