"""Kernel building blocks: device tree parsing, checked buffers and strings, trap decoding, a VFS mount tree and its message types."""

__version__ = "0.1.0"