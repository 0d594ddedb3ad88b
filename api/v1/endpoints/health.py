# api/v1/endpoints/health.py
from fastapi import APIRouter
from datetime import datetime

from agents.base import agent_registry

router = APIRouter()

@router.get("/")
async def health_check():
    """Basic health check endpoint"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "service": "FarmAssist Backend",
        "agents": await agent_registry.health_check_all()
    }

@router.get("/agents")
async def agents_info():
    """Registered agents with their configuration"""
    return agent_registry.get_agents_info()
