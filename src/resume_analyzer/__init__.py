"""AI-powered PDF resume analyzer."""

__version__ = "0.1.0"
