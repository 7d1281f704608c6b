"""
Planner Agent - Turns a request into an ordered plan of agents.

RESPONSIBILITY:
The Planner decides WHICH registered agents should handle a request and
in what order. It does not run them; ``build_workflow`` hands the plan to
the WorkflowEngine.

FLOW:
1. Receive the user request (metadata["userRequest"])
2. Ask the LLM for a JSON plan over the registered agent names
3. Drop agent names the registry does not know
4. Fall back to the default generator plan if anything goes wrong
5. Return the plan as JSON text: {"steps", "estimatedDuration", "agents"}
"""

import json
import logging
from typing import Any, Dict, List, Optional

from verno.agents.base import AgentContext, AgentRole, BaseAgent
from verno.agents.registry import AgentRegistry
from verno.services.llm_service import LLMClient
from verno.services.workflow import Workflow, WorkflowStep


DEFAULT_PLAN_AGENTS = ["codeGenerator", "documentationAgent", "testGenerator"]

# Rough per-agent cost used for estimatedDuration, in seconds
SECONDS_PER_AGENT = 30

PLANNER_PROMPT = """You are a software project planner. Pick the agents needed
to fulfil the request below and order them.

Available agents:
{agents}

User request:
{request}

Respond with ONLY valid JSON:
{{
    "steps": ["Short description of step 1", "..."],
    "agents": ["agentName", "..."]
}}

Rules:
- Only use agent names from the list above
- Each agent appears at most once
- Keep plans simple and focused
"""


class PlannerAgent(BaseAgent):
    """
    Creates execution plans for complex tasks.

    Works without an LLM: the default plan is used whenever no client is
    injected or its answer cannot be parsed.
    """

    name = "PlannerAgent"
    description = "Creates detailed execution plans for complex tasks"
    role = AgentRole.PLANNER

    def __init__(
        self,
        agent_registry: AgentRegistry,
        llm: Optional[LLMClient] = None,
        logger: Optional[logging.Logger] = None
    ):
        super().__init__(logger)
        self.agent_registry = agent_registry
        self.llm = llm

    async def execute(self, context: AgentContext) -> str:
        """
        Create an execution plan.

        Args:
            context: Must carry a workspace root; userRequest is optional

        Returns:
            JSON text with steps, estimatedDuration and agents
        """
        self.validate_context(context)
        self._log("Creating execution plan")

        request = context.get("userRequest") or ""
        plan: Optional[Dict[str, Any]] = None

        if self.llm is not None and request:
            response = await self.llm.generate_text(self._build_prompt(request))
            plan = self._parse_plan(response)

        if plan is None:
            plan = self._get_default_plan()

        self._log(f"Created plan with {len(plan['agents'])} agents")
        return json.dumps(plan)

    def build_workflow(self, plan: str, context: AgentContext) -> Workflow:
        """Turn planner output into a workflow over the same context."""
        data = json.loads(plan)
        steps = [WorkflowStep(agent_name=name) for name in data.get("agents", [])]
        return Workflow(steps=steps, context=context)

    def _build_prompt(self, request: str) -> str:
        agents = "\n".join(
            f"- {name}: {getattr(agent, 'description', '')}"
            for name, agent in self.agent_registry.get_all().items()
        )
        return PLANNER_PROMPT.format(agents=agents, request=request)

    def _parse_plan(self, response: str) -> Optional[Dict[str, Any]]:
        """
        Parse the LLM response into a plan.

        Returns None when no usable plan can be extracted.
        """
        start = response.find("{")
        end = response.rfind("}") + 1
        if start == -1 or end <= start:
            self._log("Planner response contained no JSON, using default plan", logging.WARNING)
            return None

        try:
            data = json.loads(response[start:end])
        except json.JSONDecodeError:
            self._log("Failed to parse planner response, using default plan", logging.WARNING)
            return None

        if not isinstance(data, dict) or not isinstance(data.get("agents"), list):
            return None

        agents: List[str] = []
        for name in data["agents"]:
            if not isinstance(name, str) or name in agents:
                continue
            if not self.agent_registry.exists(name):
                self._log(f"Dropping unknown agent '{name}' from plan", logging.WARNING)
                continue
            agents.append(name)

        if not agents:
            return None

        steps = data.get("steps")
        if not isinstance(steps, list) or not steps:
            steps = [f"Run {name}" for name in agents]

        return {
            "steps": [str(step) for step in steps],
            "estimatedDuration": len(agents) * SECONDS_PER_AGENT,
            "agents": agents,
        }

    def _get_default_plan(self) -> Dict[str, Any]:
        """Default plan: the generator agents that are registered, in pipeline order."""
        agents = [name for name in DEFAULT_PLAN_AGENTS if self.agent_registry.exists(name)]
        return {
            "steps": [f"Run {name}" for name in agents],
            "estimatedDuration": len(agents) * SECONDS_PER_AGENT,
            "agents": agents,
        }
