"""scriptwatch — JavaScript inventory and change detection for payment pages."""

__version__ = "0.1.0"
