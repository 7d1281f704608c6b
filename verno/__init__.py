"""
Verno Agent Pipeline
====================

Coordinates AI agents (code generator, documentation writer, test
generator, planner, router) into multi-step workflows, tracks the
progress of each step, and persists per-agent TODO lists and file-change
history so work can be audited or resumed.

Components:
- agents: Agent contract, registry, orchestrator and specialized agents
- services: Workflow engine, progress tracking, TODO ledger, file changes, LLM
- api: FastAPI status endpoints
- models: Pydantic data models
- core: Configuration, errors and dependencies
"""

__version__ = "1.0.0"
