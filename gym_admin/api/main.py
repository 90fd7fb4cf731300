"""FastAPI application factory"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from gym_admin.api.dependencies import get_request_id
from gym_admin.api.middleware import RequestIDMiddleware, MetricsMiddleware
from gym_admin.api.v1 import (
    activity,
    attendance,
    dashboard,
    expenses,
    members,
    memberships,
    packages,
    payment_plans,
    payments,
    refunds,
    staff,
    training,
)
from gym_admin.domain.exceptions import (
    ConflictError,
    DomainException,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from gym_admin.infrastructure.observability.logging import setup_logging
from gym_admin.config import settings

# Setup structured logging
setup_logging(settings.log_level)

STATUS_BY_EXCEPTION = {
    NotFoundError: 404,
    ValidationError: 422,
    ConflictError: 409,
    InvalidStateError: 409,
}


def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = STATUS_BY_EXCEPTION.get(type(exc), 400)
    logging.warning(
        f"{type(exc).__name__}: {exc}",
        extra={"request_id": get_request_id(request), "path": request.url.path, "status": status_code},
    )
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Gym Admin API",
        description="Members, memberships, payments, attendance and staff for gym owners",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.add_exception_handler(DomainException, domain_exception_handler)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(members.router, prefix="/v1", tags=["members"])
    app.include_router(packages.router, prefix="/v1", tags=["packages"])
    app.include_router(memberships.router, prefix="/v1", tags=["memberships"])
    app.include_router(payment_plans.router, prefix="/v1", tags=["payment plans"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])
    app.include_router(attendance.router, prefix="/v1", tags=["attendance"])
    app.include_router(staff.router, prefix="/v1", tags=["staff"])
    app.include_router(training.router, prefix="/v1", tags=["training"])
    app.include_router(refunds.router, prefix="/v1", tags=["refunds"])
    app.include_router(expenses.router, prefix="/v1", tags=["expenses"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(activity.router, prefix="/v1", tags=["activity"])

    return app


app = create_app()
