"""Packing algorithms."""

from .packer import Packer

__all__ = ["Packer"]
