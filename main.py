# main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from axis_simulator.api import app as axis_app
from axis_simulator.config import configure_logging, get_settings

settings = get_settings()
logger = configure_logging(settings.log_level)

app = FastAPI(title="Axis Simulator API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

@app.get("/")
def read_root():
    return {"message": "Axis Simulator API is running", "status": "ok"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}

app.mount("/api", axis_app)
logger.info("Axis simulator mounted at /api (origins: %s)", ", ".join(settings.cors_origins))

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=True)
