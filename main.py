# main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

import config
from database import Database
from middleware import SecurityHeadersMiddleware, limiter, rate_limit_exceeded_handler
from routes import questions
from routes.responses import register_exception_handlers

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Question Bank API",
    version="1.0.0",
    description="API for managing exam questions and question bank with multi-step form support",
    docs_url="/api-docs",
)
app.state.database = Database(config.MONGODB_URI, config.MONGODB_DB_NAME)
app.state.limiter = limiter

# Last added runs first: CORS, then security headers, then the rate limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials="*" not in config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.include_router(questions.router)


@app.on_event("startup")
async def startup_event():
    try:
        await app.state.database.connect()
    except Exception:
        logger.exception("MongoDB connection error")
        raise
    logger.info(f"Swagger docs: http://{config.HOST}:{config.PORT}/api-docs")


@app.on_event("shutdown")
async def shutdown_event():
    app.state.database.close()


def run():
    import uvicorn
    # reload=True keeps the supervisor alive after a failed startup
    uvicorn.run("main:app", host=config.HOST, port=config.PORT, reload=config.RELOAD)


if __name__ == "__main__":
    run()
