"""
Acoustic Panel Visualizer - Backend API
Main FastAPI application entry point
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# config loads the .env file on import
from config import load_config
from api.routes import router

config = load_config()

app = FastAPI(
    title="Acoustic Panel Visualizer",
    description="Place acoustic panel sets on photos of walls",
    version="1.0.0"
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router, prefix="/api")
print(f"[OK] Design routes enabled (pipeline={config.pipeline}, layout={config.layout_strategy})")


@app.get("/")
async def root():
    return {
        "message": "Acoustic Panel Visualizer API",
        "docs": "/docs",
        "version": "1.0.0"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "gemini_configured": bool(config.gemini_api_key),
        "pipeline": config.pipeline,
    }
