"""linkvault: short-code allocation and redirect resolution over an embedded store."""

__version__ = '1.0.0'
