from app.middleware.prometheus_middleware import normalize_path
from app.monitoring.prometheus_metrics import prometheus_metrics


def test_ulid_segments_are_collapsed():
    assert (
        normalize_path("/api/v1/bookings/01J8ZB2Q4K6M8N0P2R4T6V8X9Y")
        == "/api/v1/bookings/:id"
    )


def test_numeric_segments_are_collapsed():
    assert normalize_path("/api/v1/things/42/cancel") == "/api/v1/things/:id/cancel"


def test_plain_paths_are_untouched():
    assert normalize_path("/api/v1/artists/luna-duo") == "/api/v1/artists/luna-duo"


def test_booking_metrics_are_exported():
    prometheus_metrics.inc_booking_transition("ACCEPTED")
    prometheus_metrics.inc_booking_conflict()

    payload = prometheus_metrics.get_metrics().decode()

    assert 'enescena_booking_transitions_total{status="ACCEPTED"}' in payload
    assert "enescena_booking_conflicts_total" in payload
