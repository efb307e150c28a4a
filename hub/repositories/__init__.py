"""Persistence layer for hub state."""

from hub.repositories.message_repository import MessageRepository

__all__ = ["MessageRepository"]
