"""
API module - FastAPI routers and their dependency providers.

Usage:
    from jobportal.api.routes import api_router
    app.include_router(api_router, prefix="/api/v1")
"""
