"""
Main API application
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.evaluation_api import router as evaluation_router
from config.settings import get_settings
from models.verb_lexicon import VERB_LEXICON

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting server - verb lexicon has %d verbs", len(VERB_LEXICON))
    logger.info(
        "Policy: variance threshold %.2f, score weights match=%.2f balance=%.2f",
        settings.recommendation_variance_threshold,
        settings.final_score_match_weight,
        settings.final_score_balance_weight,
    )

    yield

    logger.info("Shutting down server...")


app = FastAPI(
    title="Assessment Alignment API",
    description="API to evaluate exam papers against course outcomes, module hours and Bloom's taxonomy",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(evaluation_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Assessment Alignment API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
