"""minecart: publish a graph of knowledge-base nuggets as ordered, well-nested documents."""

__version__ = "0.1.0"
