# backend/tests/conftest.py
"""
Pytest configuration for the availability scheduler test suite.

Tests never reach a real schedule backend or database: settings point at an
in-memory SQLite database and a placeholder API host.
"""

import os
import sys

# Set testing mode BEFORE any package imports
os.environ["CI"] = "true"
os.environ["DOCTOR_SLOTS_ENVIRONMENT"] = "test"
os.environ["DOCTOR_SLOTS_DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["DOCTOR_SLOTS_API_BASE_URL"] = "https://schedule.doctor-slots.test"

# Add the backend directory to Python path so imports work
backend_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, backend_dir)

from datetime import date

import pytest

from doctor_slots.domain.slot_set import SlotSet
from doctor_slots.services.slot_editor import SlotEditor

from tests._utils import InMemorySlotPort


@pytest.fixture
def monday() -> date:
    return date(2024, 6, 10)


@pytest.fixture
def sample_set() -> SlotSet:
    return SlotSet(
        {
            "2024-06-10": ["9:00 AM", "5:00 PM"],
            "2024-06-12": ["10:00 AM"],
        }
    )


@pytest.fixture
def editor(sample_set: SlotSet) -> SlotEditor:
    session = SlotEditor("doc-1")
    session.seed_slot_set(sample_set)
    return session


@pytest.fixture
def memory_port() -> InMemorySlotPort:
    return InMemorySlotPort()
