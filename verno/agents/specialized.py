"""
Specialized Agents - Generate files from the orchestrator's analysis.

Each generator asks the LLM twice and writes two files under
``<workspace>/<generated_dir>/``:

    CodeGeneratorAgent   specification  ->  index.ts, types.ts
    DocumentationAgent   codeAnalysis   ->  README.md, API.md
    TestGeneratorAgent   codeAnalysis   ->  index.test.ts, integration.test.ts
"""

import logging
import os
from abc import abstractmethod
from typing import Any, Optional

from verno.agents.base import AgentContext, AgentRole, BaseAgent
from verno.core.config import get_settings
from verno.core.errors import ValidationError
from verno.services.file_service import FileService
from verno.services.llm_service import LLMClient


class GeneratorAgent(BaseAgent):
    """
    Shared plumbing for agents that turn analysis text into files.

    Subclasses implement ``validate_input`` and ``_generate``; ``execute``
    wraps them with validation, pre/post processing and error logging.
    """

    input_error: str = "Invalid input"

    def __init__(
        self,
        llm: LLMClient,
        file_service: FileService,
        logger: Optional[logging.Logger] = None,
        output_dir: Optional[str] = None
    ):
        """
        Args:
            llm: Client used for every generation call
            file_service: Writes (and records) the generated files
            logger: Logger for progress messages
            output_dir: Directory name under the workspace root
        """
        super().__init__(logger)
        self.llm = llm
        self.file_service = file_service
        self.output_dir = output_dir or get_settings().generated_dir

    def validate_input(self, context: AgentContext) -> bool:
        return bool(context.workspace_root)

    async def pre_process(self, context: AgentContext) -> AgentContext:
        self._log("Pre-processing request")
        return context

    async def post_process(self, output: str) -> str:
        self._log("Post-processing output")
        return output

    async def execute(self, context: AgentContext) -> str:
        if not self.validate_input(context):
            raise ValidationError(self.input_error, agent_name=self.name)

        context = await self.pre_process(context)
        try:
            output = await self._generate(context)
        except Exception as e:
            self._log(f"Generation error: {e}", logging.ERROR)
            raise

        return await self.post_process(output)

    @abstractmethod
    async def _generate(self, context: AgentContext) -> str:
        """Write the agent's files and return its result text."""
        pass

    async def _write_generated(self, context: AgentContext, filename: str, prompt: str) -> str:
        """Generate text for ``prompt`` and write it to the output directory."""
        content = await self.llm.generate_text(prompt)
        file_path = os.path.join(context.workspace_root, self.output_dir, filename)
        await self.file_service.create_file(file_path, content)
        self._log(f"File created: {file_path}")
        return file_path


def _analysis_of(context: AgentContext) -> Any:
    return context.get("codeAnalysis") or context.file_content


class CodeGeneratorAgent(GeneratorAgent):
    """Generates source and type definitions from a specification."""

    name = "CodeGeneratorAgent"
    description = "Generates code based on specifications and requirements"
    role = AgentRole.CODE_GENERATOR
    input_error = "Invalid input for code generation"

    def validate_input(self, context: AgentContext) -> bool:
        return super().validate_input(context) and bool(context.get("specification"))

    async def _generate(self, context: AgentContext) -> str:
        specification = context.get("specification")
        self._log("Generating code files")

        await self._write_generated(
            context, "index.ts",
            f"Generate production-ready TypeScript code based on this specification: "
            f"{specification}. Return only the code without explanations."
        )
        await self._write_generated(
            context, "types.ts",
            f"Generate TypeScript interfaces and types for this specification: "
            f"{specification}. Return only the type definitions."
        )
        return f"Generated code files for: {specification}"


class DocumentationAgent(GeneratorAgent):
    """Generates a README and API reference."""

    name = "DocumentationAgent"
    description = "Generates comprehensive documentation for code and APIs"
    role = AgentRole.DOCUMENTATION
    input_error = "Invalid input for documentation generation"

    def validate_input(self, context: AgentContext) -> bool:
        return super().validate_input(context) and bool(_analysis_of(context))

    async def _generate(self, context: AgentContext) -> str:
        analysis = _analysis_of(context)
        self._log("Generating documentation")

        await self._write_generated(
            context, "README.md",
            f"Generate a comprehensive README.md for this project specification: "
            f"{analysis}. Include installation, usage, and API documentation."
        )
        await self._write_generated(
            context, "API.md",
            f"Generate detailed API documentation for this specification: "
            f"{analysis}. Include all endpoints, parameters, and examples."
        )
        return "Documentation generation complete"


class TestGeneratorAgent(GeneratorAgent):
    """Generates unit and integration test suites."""

    __test__ = False

    name = "TestGeneratorAgent"
    description = "Generates unit and integration tests for generated code"
    role = AgentRole.TEST_GENERATOR
    input_error = "Invalid input for test generation"

    def validate_input(self, context: AgentContext) -> bool:
        return super().validate_input(context) and bool(_analysis_of(context))

    async def _generate(self, context: AgentContext) -> str:
        analysis = _analysis_of(context)
        self._log("Generating tests")

        await self._write_generated(
            context, "index.test.ts",
            f"Generate comprehensive unit tests for this specification: "
            f"{analysis}. Use Jest framework and return only the test code."
        )
        await self._write_generated(
            context, "integration.test.ts",
            f"Generate integration tests for this specification: "
            f"{analysis}. Return only the test code."
        )
        return "Test generation complete"
