"""Generador de scrambles para los retos diarios de speedcubing."""

__version__ = "0.1.0"
