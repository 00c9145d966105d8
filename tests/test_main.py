"""
Tests for the main application endpoints.
"""

def test_root_endpoint(client):
    """
    Test the root endpoint returns a welcome message.
    """
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data


def test_health_check(client):
    """
    Test the health check endpoint returns a healthy status.
    """
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


def test_request_id_is_echoed(client):
    """
    Test the logging middleware propagates a caller-supplied request id.
    """
    response = client.get("/", headers={"X-Request-ID": "trace-123"})
    assert response.headers["X-Request-ID"] == "trace-123"
    assert "X-Process-Time" in response.headers


def test_infrastructure_errors_are_retryable(client, monkeypatch):
    """
    Test storage failures surface as 503 with a retryable flag.
    """
    from medsafety.exceptions import InfrastructureException

    def failing_list_alerts(*args, **kwargs):
        raise InfrastructureException("Database timeout")

    monkeypatch.setattr("medsafety.alerts.router.list_alerts", failing_list_alerts)
    response = client.get("/api/v1/alerts/", params={"patient_id": "patient-1"})
    assert response.status_code == 503
    assert response.json() == {"detail": "Database timeout", "retryable": True}


def test_route_handlers_run_in_threadpool():
    """
    Test every API handler is a plain function so blocking database, lock
    and webhook calls stay off the event loop.
    """
    import inspect

    from fastapi.routing import APIRoute
    from medsafety.main import app

    handlers = [route.endpoint for route in app.routes if isinstance(route, APIRoute)]
    assert handlers
    assert [h.__name__ for h in handlers if inspect.iscoroutinefunction(h)] == []
