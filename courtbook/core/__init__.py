"""Core module for the courtbook application."""

from .types import FirestoreDocument

__all__ = ["FirestoreDocument"]
