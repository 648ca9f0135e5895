"""Data management: schemas and the bounded history store."""

from shadowban_system.data_management.history_store import HistoryStore

__all__ = ["HistoryStore"]
