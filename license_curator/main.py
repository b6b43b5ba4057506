import logging

from fastapi import FastAPI
from license_curator.api.licenses import router as licenses_router
from license_curator.core.config import LOG_LEVEL

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(
    title="License Curator",
    version="1.0.0",
)

# license algebra and matcher endpoints
app.include_router(licenses_router, prefix="/api", tags=["Licenses"])


@app.get("/")
def root():
    return {"message": "License Curator Backend is running"}
