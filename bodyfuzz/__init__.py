"""bodyfuzz — negative test case generator for JSON request bodies."""

__version__ = "0.1.0"
