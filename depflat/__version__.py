"""depflat version string, shown by ``depflat --version``."""

__version__ = "0.1.0"
