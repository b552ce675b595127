"""Lambda entry point: API Gateway events are served by the FastAPI app through Mangum."""
from mangum import Mangum

from backend.main import app

# Startup work is skipped; the MongoDB client connects on first use
handler = Mangum(app, lifespan="off")
