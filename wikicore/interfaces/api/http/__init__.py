"""HTTP layer: FastAPI routers, pydantic schemas and error mapping."""
