"""
Router Agent - Sends a request to the single most suitable agent.

Routing order:
1. metadata["targetAgent"], when the caller already knows
2. First keyword rule matching userRequest or selected_text
3. The default agent
"""

import logging
from typing import List, Optional, Sequence, Tuple

from verno.agents.base import AgentContext, AgentRole, BaseAgent
from verno.agents.registry import AgentRegistry
from verno.core.errors import ValidationError


DEFAULT_ROUTES: List[Tuple[Sequence[str], str]] = [
    (("test", "spec", "coverage"), "testGenerator"),
    (("document", "readme", "docs", "explain"), "documentationAgent"),
    (("generate", "implement", "create", "build", "code"), "codeGenerator"),
]


class RouterAgent(BaseAgent):
    """
    Routes user requests to the most appropriate specialized agent.

    The chosen agent must be registered: a miss raises AgentNotFoundError.
    """

    name = "RouterAgent"
    description = "Routes user requests to the most appropriate specialized agent"
    role = AgentRole.ROUTER

    def __init__(
        self,
        agent_registry: AgentRegistry,
        routes: Optional[List[Tuple[Sequence[str], str]]] = None,
        default_agent: str = "codeGenerator",
        logger: Optional[logging.Logger] = None
    ):
        """
        Args:
            agent_registry: Registry the chosen agent is resolved from
            routes: (keywords, agent name) rules, checked in order
            default_agent: Used when nothing else matches
            logger: Logger for routing decisions
        """
        super().__init__(logger)
        self.agent_registry = agent_registry
        self.routes = routes if routes is not None else DEFAULT_ROUTES
        self.default_agent = default_agent

    async def execute(self, context: AgentContext) -> str:
        self.validate_context(context)

        target = self.route(context)
        if target == self.name or self.agent_registry.get(target) is self:
            raise ValidationError(
                f"Router cannot route a request to itself ('{target}')", agent_name=self.name
            )
        agent = self.agent_registry.require(target)

        self._log(f"Routing request to {target}")
        return await agent.execute(context)

    def route(self, context: AgentContext) -> str:
        """Name of the agent that should handle ``context``."""
        explicit = context.get("targetAgent")
        if explicit:
            return explicit

        text = " ".join(
            part for part in (context.get("userRequest"), context.selected_text) if part
        ).lower()

        for keywords, agent_name in self.routes:
            if any(keyword in text for keyword in keywords):
                return agent_name

        return self.default_agent
