"""NextEuropa platform scaffolding: artifact download, extraction and patching."""

__version__ = "0.1.0"
