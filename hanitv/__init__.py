"""hanitv - hanime.tv catalog adapter and CLI."""

__version__ = "0.1.0"
