"""Pure Python QR Code generator: segments, error correction, symbols and SVG/text rendering."""

__version__ = "1.0.0"