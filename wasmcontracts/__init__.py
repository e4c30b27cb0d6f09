"""Example smart contracts with an in-memory runtime for running them."""

__version__ = "0.1.0"