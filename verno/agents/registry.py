"""
Agent Registry - Name to agent mapping shared by the pipeline.

Two lookup policies:
- ``get``: optional lookup, returns None on a miss (orchestrator stages)
- ``require``: required lookup, raises AgentNotFoundError (workflow engine)
"""

from typing import Dict, List, Optional

from verno.agents.base import Agent
from verno.core.errors import AgentNotFoundError


class AgentRegistry:
    """
    Process-wide registry of agents keyed by name.

    The last ``register`` for a name wins. Not synchronized: at most one
    pipeline mutates a registry at a time.
    """

    def __init__(self):
        self._agents: Dict[str, Agent] = {}

    def register(self, name: str, agent: Agent) -> None:
        """Insert or overwrite the agent stored under ``name``."""
        self._agents[name] = agent

    def unregister(self, name: str) -> bool:
        """Remove an agent. Returns True iff an entry existed."""
        if name in self._agents:
            del self._agents[name]
            return True
        return False

    def get(self, name: str) -> Optional[Agent]:
        return self._agents.get(name)

    def require(self, name: str) -> Agent:
        """Get an agent that must be present."""
        agent = self._agents.get(name)
        if agent is None:
            raise AgentNotFoundError(name)
        return agent

    def exists(self, name: str) -> bool:
        return name in self._agents

    def list(self) -> List[str]:
        """Registered names in insertion order."""
        return list(self._agents.keys())

    def get_all(self) -> Dict[str, Agent]:
        """Copy of the mapping; mutating it does not affect the registry."""
        return dict(self._agents)

    def __contains__(self, name: object) -> bool:
        return name in self._agents

    def __len__(self) -> int:
        return len(self._agents)
