"""HTTP layer: FastAPI app, routers and dependencies."""
