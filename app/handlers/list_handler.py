from fastapi import FastAPI
from mangum import Mangum
from app.main import create_app


def build_handler(app: FastAPI) -> Mangum:
    # Mangum runs a lifespan cycle per invocation, which would close the
    # motor client after the first one.
    return Mangum(app, lifespan="off")


app = create_app()

handler = build_handler(app)
