"""Core module for the shuttlebook application."""

from .types import FirestoreDocument

__all__ = ["FirestoreDocument"]
