"""
Assessment Synthesis API — Main Application
FastAPI application that turns an uploaded image into a Bloom-weighted
question paper.
"""

from dotenv import load_dotenv
load_dotenv()

import os
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import generation


app = FastAPI(
    title="Assessment Synthesis API",
    description="Image-driven question generation with Bloom's taxonomy mark allocation",
    version="1.0.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ─── Routers ───────────────────────────────────────────────────────────────────

app.include_router(generation.router)


@app.get("/")
def root():
    return {
        "name": "Assessment Synthesis API",
        "version": "1.0.0",
        "endpoints": {
            "docs": "/docs",
            "generate": "/generate-questions",
            "health": "/health",
        },
    }


@app.get("/health")
async def health_check():
    """Basic health check - API is running"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "assessment-api",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "3000")))
