"""Base agent class: the campaign planner and product analyst inherit from this.

Each agent auto-loads its model/temperature/max_tokens/sampling settings from
config.AGENT_LLM_CONFIG, so you can assign a different Gemini model per agent.
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from pydantic import BaseModel

import config
from pipeline.llm import call_llm

logger = logging.getLogger(__name__)


class BaseAgent(ABC):
    """Base class for all agents.

    Each agent must define:
      - name: human-readable identifier
      - slug: file-safe identifier (must match a key in AGENT_LLM_CONFIG)
      - system_prompt: the system instruction for the model
      - build_user_prompt(): constructs the user message from inputs

    LLM config is auto-loaded from config.py based on the agent's slug.
    Override in constructor if needed.
    """

    name: str = "BaseAgent"
    slug: str = "base"

    def __init__(
        self,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ):
        # Load per-agent config, then allow constructor overrides
        llm_conf = config.get_agent_llm_config(self.slug)
        self.provider = llm_conf["provider"]
        self.model = model or llm_conf["model"]
        self.temperature = temperature if temperature is not None else llm_conf["temperature"]
        self.max_tokens = max_tokens if max_tokens is not None else llm_conf["max_tokens"]
        self.top_p = llm_conf["top_p"]
        self.top_k = llm_conf["top_k"]
        self.json_mode = llm_conf["json_mode"]
        self.logger = logging.getLogger(f"agent.{self.slug}")

        self.logger.debug(
            "Config: provider=%s, model=%s, temp=%.2f, max_tokens=%d",
            self.provider, self.model, self.temperature, self.max_tokens,
        )

    @property
    @abstractmethod
    def system_prompt(self) -> str:
        """Return the system instruction for this agent."""
        ...

    @abstractmethod
    def build_user_prompt(self, inputs: dict[str, Any]) -> str:
        """Build the user prompt from agent inputs."""
        ...

    def run_text(self, inputs: dict[str, Any]) -> str:
        """Build prompt → call LLM → return the raw reply text."""
        self.logger.info(
            "=== %s starting [%s/%s] ===",
            self.name, self.provider, self.model,
        )
        start = time.time()

        user_prompt = self.build_user_prompt(inputs)
        self.logger.info("User prompt: %d chars", len(user_prompt))
        result = call_llm(
            system_prompt=self.system_prompt,
            user_prompt=user_prompt,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            json_mode=self.json_mode,
            top_p=self.top_p,
            top_k=self.top_k,
        )

        elapsed = time.time() - start
        self.logger.info("=== %s finished in %.1fs ===", self.name, elapsed)
        return result

    def save_output(self, result: BaseModel) -> Path:
        """Save a result as camelCase JSON to the outputs directory."""
        config.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
        output_path = config.OUTPUT_DIR / f"{self.slug}_output.json"
        output_path.write_text(
            result.model_dump_json(indent=2, by_alias=True),
            encoding="utf-8",
        )
        self.logger.info("Output saved: %s", output_path)
        return output_path

    def load_previous_output(self) -> dict[str, Any] | None:
        """Load this agent's most recent output from disk (if any)."""
        output_path = config.OUTPUT_DIR / f"{self.slug}_output.json"
        if output_path.exists():
            return json.loads(output_path.read_text(encoding="utf-8"))
        return None
