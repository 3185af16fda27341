from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from web.backend.deps import get_config

app = FastAPI(title="Chat Jukebox Web API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().web.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
from web.backend.routers import chat, live

app.include_router(chat.router, prefix="/api", tags=["chat"])
app.include_router(live.router, tags=["live"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
