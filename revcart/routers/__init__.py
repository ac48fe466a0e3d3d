"""
FastAPI routers grouped by domain.

Each module exposes an APIRouter that create_app() includes; endpoints only
map HTTP bodies to service calls.
"""
