"""puzzlebench: run and benchmark puzzle solutions."""

__version__ = "0.1.0"
