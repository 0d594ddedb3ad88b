# api/v1/endpoints/common.py
from fastapi import HTTPException
from fastapi.responses import JSONResponse

from agents.base import BaseAgent, agent_registry

def get_agent(agent_name: str) -> BaseAgent:
    agent = agent_registry.get(agent_name)
    if not agent:
        raise HTTPException(status_code=500, detail=f"{agent_name.capitalize()} agent not available")
    return agent

def missing_coordinates() -> JSONResponse:
    return JSONResponse(status_code=400, content={
        "success": False,
        "error": "Missing coordinates",
        "message": "Please provide lat and lon parameters"
    })

def internal_error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={
        "success": False,
        "error": "Internal server error",
        "message": message
    })
