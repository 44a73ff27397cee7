"""Encoder and decoder for the GameMaker variant of the QOI image format."""

__version__ = "0.4.1"