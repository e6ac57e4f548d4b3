import logging
from fastapi import FastAPI
from app.config import get_settings
from app.api.routes import chat, messages, knowledge_base, moderation

settings = get_settings()

# Configure application logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Set log level for app modules
logger = logging.getLogger("app")
logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

app = FastAPI(
    title=settings.app_name,
    description="Team dashboard: AI chat assistant with a curated knowledge base",
    version="0.1.0",
)

# Include routers
app.include_router(chat.router, prefix="/api/chat", tags=["Chat"])
app.include_router(messages.router, prefix="/api/messages", tags=["Messages"])
app.include_router(
    knowledge_base.router, prefix="/api/knowledge-base", tags=["Knowledge Base"]
)
app.include_router(moderation.router, prefix="/api/moderation", tags=["Moderation"])


@app.get("/")
async def root():
    return {
        "message": f"Welcome to {settings.app_name} - AI chat assistant and team knowledge base",
        "version": "0.1.0",
        "endpoints": {
            "chat": "/api/chat",
            "messages": "/api/messages",
            "knowledge_base": "/api/knowledge-base",
            "moderation": "/api/moderation",
            "health": "/health",
            "docs": "/docs",
            "redoc": "/redoc",
        },
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": settings.app_name}
