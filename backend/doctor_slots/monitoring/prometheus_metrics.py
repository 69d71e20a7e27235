"""
Prometheus metrics for the availability scheduler.

Service timings come from the @measure_operation decorator on BaseService;
slot-specific counters are recorded by the edit session.
"""

from typing import Optional

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

# Custom registry to avoid conflicts with host application metrics
REGISTRY = CollectorRegistry()

service_operation_duration_seconds = Histogram(
    "doctor_slots_service_operation_duration_seconds",
    "Service operation duration in seconds",
    ["service", "operation"],
    registry=REGISTRY,
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

service_operations_total = Counter(
    "doctor_slots_service_operations_total",
    "Total number of service operations",
    ["service", "operation", "status"],
    registry=REGISTRY,
)

errors_total = Counter(
    "doctor_slots_errors_total",
    "Total number of errors by type",
    ["service", "operation", "error_type"],
    registry=REGISTRY,
)

slot_mutations_total = Counter(
    "doctor_slots_slot_mutations_total",
    "Slot edit operations that changed the schedule",
    ["operation"],
    registry=REGISTRY,
)

capacity_rejections_total = Counter(
    "doctor_slots_capacity_rejections_total",
    "Add operations rejected because the day was full",
    registry=REGISTRY,
)


class PrometheusMetrics:
    """Thin facade over the module-level collectors."""

    @staticmethod
    def record_service_operation(
        service: str,
        operation: str,
        duration: float,
        status: str = "success",
        error_type: Optional[str] = None,
    ) -> None:
        """
        Record service operation metrics from @measure_operation decorator.

        Args:
            service: Service name (e.g., 'SlotScheduleService')
            operation: Operation/method name (e.g., 'save_schedule')
            duration: Operation duration in seconds
            status: Operation status ('success' or 'error')
            error_type: Type of error if status is 'error'
        """
        service_operation_duration_seconds.labels(service=service, operation=operation).observe(
            duration
        )
        service_operations_total.labels(service=service, operation=operation, status=status).inc()
        if status == "error" and error_type:
            errors_total.labels(service=service, operation=operation, error_type=error_type).inc()

    @staticmethod
    def record_slot_mutation(operation: str) -> None:
        slot_mutations_total.labels(operation=operation).inc()

    @staticmethod
    def record_capacity_rejection() -> None:
        capacity_rejections_total.inc()

    @staticmethod
    def get_metrics() -> bytes:
        """Render the registry in Prometheus text exposition format."""
        return generate_latest(REGISTRY)


prometheus_metrics = PrometheusMetrics()
