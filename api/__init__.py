"""
Sufra Recipes API - bilingual household recipes, shopping, pantry and tools
FastAPI service with in-memory storage and WebSocket change broadcasting.
"""

import logging

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings
from services.sync_service import sync_manager

from .family_groups import router as family_groups_router
from .ingredients import router as ingredients_router
from .pantry import router as pantry_router
from .recipes import router as recipes_router
from .shopping import router as shopping_router
from .tools import router as tools_router
from .users import router as users_router

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Bilingual (English/Arabic) household recipes with shared shopping, pantry and tools lists.",
    version="1.0.0",
    debug=settings.debug,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users_router, prefix="/api/users", tags=["users"])
app.include_router(family_groups_router, prefix="/api/family-groups", tags=["family-groups"])
app.include_router(recipes_router, prefix="/api/recipes", tags=["recipes"])
app.include_router(shopping_router, prefix="/api/shopping", tags=["shopping"])
app.include_router(pantry_router, prefix="/api/pantry", tags=["pantry"])
app.include_router(tools_router, prefix="/api/tools", tags=["tools"])
app.include_router(ingredients_router, prefix="/api/ingredients", tags=["ingredients"])


@app.get("/health")
async def health_check():
    """Liveness probe"""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "connections": sync_manager.connection_count,
    }


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Real-time sync channel; clients only listen, incoming text is ignored"""
    await sync_manager.connect(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        sync_manager.disconnect(websocket)
