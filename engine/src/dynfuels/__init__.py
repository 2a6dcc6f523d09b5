"""Dynamic fuel type classification for forest landscape simulations."""

__version__ = "1.0.0"
