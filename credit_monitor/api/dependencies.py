"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from credit_monitor.infrastructure.store.session import MonitorSession


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_monitor(request: Request) -> MonitorSession:
    """Provide the monitor session owned by the application"""
    return request.app.state.monitor
