"""Expression trees in x: parsing, symbolic differentiation, simple integration and simplification."""

__version__ = "0.1.0"