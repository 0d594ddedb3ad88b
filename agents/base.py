# agents/base.py
"""
Base agent class for all agents in the system
"""

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar, Generic, List
from pydantic import BaseModel
import asyncio
import logging
from datetime import datetime, timezone

from core.config import Settings, get_settings
from core.exceptions import IncompleteUpstreamDataError

DataType = TypeVar('DataType')

logger = logging.getLogger(__name__)

def format_utc(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix"""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")

def utc_timestamp() -> str:
    return format_utc(datetime.now(timezone.utc))

async def gather_upstream(*fetches: Awaitable[Any], message: str) -> List[Any]:
    """
    Await independent fetches concurrently and return their results in order.

    If any fetch fails the whole set fails with IncompleteUpstreamDataError;
    partial results are never returned.
    """
    results = await asyncio.gather(*fetches, return_exceptions=True)

    failures = [result for result in results if isinstance(result, BaseException)]
    for failure in failures:
        if not isinstance(failure, Exception):
            raise failure
    if failures:
        for failure in failures:
            logger.warning(f"Upstream fetch failed: {failure!r}")
        raise IncompleteUpstreamDataError(message) from failures[0]

    return list(results)

class AgentResponse(BaseModel, Generic[DataType]):
    """Response envelope shared by every agent entry point"""
    success: bool
    data: Optional[DataType] = None
    error: Optional[str] = None
    timestamp: str

class BaseAgent(ABC):
    """
    Base class for all agents

    Provides common functionality like:
    - Configuration management
    - Error handling at the orchestration boundary
    - Logging
    - Health reporting
    """

    def __init__(self, agent_name: str, settings: Optional[Settings] = None):
        self.agent_name = agent_name
        self.settings = settings or get_settings()
        self.config = self.settings.get_agent_config(agent_name)
        self.logger = logging.getLogger(f"agents.{agent_name}")

        # Validate configuration
        self._validate_config()

        self.logger.info(f"Initialized {agent_name} agent")

    @abstractmethod
    def _validate_config(self) -> None:
        """Validate agent-specific configuration"""
        pass

    def get_fallback_response(self, error: Exception) -> AgentResponse:
        """Failure envelope returned when an operation raises"""
        return AgentResponse(
            success=False,
            error=str(error) or error.__class__.__name__,
            timestamp=utc_timestamp()
        )

    async def execute(self, operation: Callable[[], Awaitable[Any]], description: str) -> AgentResponse:
        """
        Run one entry point and wrap its result in a response envelope.

        This is the only place errors are caught: nothing is retried and no
        partial data is returned.
        """
        start_time = datetime.now()

        try:
            self.logger.info(f"Processing {self.agent_name} request: {description}")
            data = await operation()

            execution_time = (datetime.now() - start_time).total_seconds()
            self.logger.info(f"Request processed in {execution_time:.2f}s")

            return AgentResponse(success=True, data=data, timestamp=utc_timestamp())

        except Exception as e:
            self.logger.error(f"Error processing {description}: {e}", exc_info=True)
            return self.get_fallback_response(e)

    async def health_check(self) -> Dict[str, Any]:
        """Agent health check"""
        try:
            # Basic configuration check
            self._validate_config()

            return {
                "agent": self.agent_name,
                "status": "healthy",
                "timestamp": utc_timestamp(),
                "config_valid": True
            }
        except Exception as e:
            return {
                "agent": self.agent_name,
                "status": "unhealthy",
                "timestamp": utc_timestamp(),
                "error": str(e),
                "config_valid": False
            }

    def get_agent_info(self) -> Dict[str, Any]:
        """Get agent information"""
        return {
            "name": self.agent_name,
            "version": self.settings.api_version,
            "config": self.config,
            "description": self.__class__.__doc__ or f"{self.agent_name} agent"
        }

class AgentRegistry:
    """Registry for managing multiple agents"""

    def __init__(self):
        self._agents: Dict[str, BaseAgent] = {}
        self.logger = logging.getLogger("agents.registry")

    def register(self, agent: BaseAgent) -> None:
        """Register an agent"""
        self._agents[agent.agent_name] = agent
        self.logger.info(f"Registered agent: {agent.agent_name}")

    def unregister(self, agent_name: str) -> None:
        """Remove an agent"""
        self._agents.pop(agent_name, None)

    def get(self, agent_name: str) -> Optional[BaseAgent]:
        """Get agent by name"""
        return self._agents.get(agent_name)

    async def health_check_all(self) -> Dict[str, Any]:
        """Health check all agents"""
        results = {}
        for name, agent in self._agents.items():
            results[name] = await agent.health_check()
        return results

    def get_agents_info(self) -> Dict[str, Any]:
        """Get information about all agents"""
        return {
            name: agent.get_agent_info()
            for name, agent in self._agents.items()
        }

# Global agent registry
agent_registry = AgentRegistry()
