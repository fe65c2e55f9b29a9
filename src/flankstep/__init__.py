"""Download flank, run it and export its results for a CI pipeline."""

__version__ = "0.1.0"
