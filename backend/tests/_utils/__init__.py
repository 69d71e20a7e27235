"""Shared helpers for backend test suites."""

from .memory_port import InMemorySlotPort, RecordingListener

__all__ = ["InMemorySlotPort", "RecordingListener"]
