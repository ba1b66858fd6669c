"""storectl — storefront back-office control CLI."""

__version__ = "0.3.0"
