"""Safety-adjusted spending power (SASP) calculator."""

__version__ = "0.1.0"
