# backend/tests/unit/test_base_service_metrics.py
"""
Unit tests for the metrics functionality in BaseService.

Run with: pytest backend/tests/unit/test_base_service_metrics.py -v
"""

import logging

import pytest

from doctor_slots.monitoring.prometheus_metrics import prometheus_metrics
from doctor_slots.services.base import BaseService


class ExampleService(BaseService):
    """Example service for metrics testing."""

    @BaseService.measure_operation("fast_operation")
    def fast_operation(self):
        return "success"

    @BaseService.measure_operation("failing_operation")
    def failing_operation(self):
        raise ValueError("This operation always fails")

    @BaseService.measure_operation("async_operation")
    async def async_operation(self, value):
        return value * 2

    def complex_operation(self):
        with self.measure_operation_context("complex_operation"):
            result = []
            for i in range(3):
                with self.measure_operation_context(f"sub_operation_{i}"):
                    result.append(i)
            return result


class TestBaseServiceMetrics:
    """Test the metrics functionality."""

    @pytest.fixture(autouse=True)
    def clear_metrics(self):
        """Clear metrics before each test."""
        BaseService._class_metrics.clear()
        yield

    @pytest.fixture
    def test_service(self):
        return ExampleService()

    def test_decorator_metrics_collection(self, test_service):
        assert test_service.get_metrics() == {}

        for _ in range(3):
            test_service.fast_operation()

        metrics = test_service.get_metrics()
        assert metrics["fast_operation"]["count"] == 3
        assert metrics["fast_operation"]["success_rate"] == 1.0
        assert metrics["fast_operation"]["min_time"] <= metrics["fast_operation"]["max_time"]

    def test_failure_tracking(self, test_service):
        test_service.fast_operation()
        with pytest.raises(ValueError):
            test_service.failing_operation()

        metrics = test_service.get_metrics()
        assert metrics["failing_operation"]["count"] == 1
        assert metrics["failing_operation"]["success_rate"] == 0.0

    @pytest.mark.asyncio
    async def test_async_operations_are_measured(self, test_service):
        assert await test_service.async_operation(21) == 42
        assert test_service.get_metrics()["async_operation"]["count"] == 1

    def test_context_manager_metrics(self, test_service):
        assert test_service.complex_operation() == [0, 1, 2]

        metrics = test_service.get_metrics()
        assert "complex_operation" in metrics
        for i in range(3):
            assert metrics[f"sub_operation_{i}"]["count"] == 1

    def test_decorator_marks_function(self):
        assert ExampleService.fast_operation._is_measured is True
        assert ExampleService.fast_operation._operation_name == "fast_operation"

    def test_metrics_are_per_class(self, test_service):
        class OtherService(BaseService):
            pass

        test_service.fast_operation()
        assert OtherService().get_metrics() == {}

    def test_log_operation_includes_context(self, test_service, caplog):
        with caplog.at_level(logging.INFO, logger="ExampleService"):
            test_service.log_operation("save_schedule", owner_id="doc-1")

        record = caplog.records[-1]
        assert record.message == "Operation: save_schedule"
        assert record.owner_id == "doc-1"

    def test_prometheus_export_includes_operation(self, test_service):
        test_service.fast_operation()

        exported = prometheus_metrics.get_metrics().decode()
        assert "doctor_slots_service_operations_total" in exported
        assert 'service="ExampleService"' in exported
