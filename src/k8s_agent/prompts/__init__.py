"""Prompt templates for the generation and evaluation models."""

from k8s_agent.prompts.evaluator import EVALUATOR_SYSTEM_PROMPT, build_evaluation_prompt
from k8s_agent.prompts.generator import GENERATOR_SYSTEM_PROMPT, build_refinement_prompt

__all__ = [
    "EVALUATOR_SYSTEM_PROMPT",
    "GENERATOR_SYSTEM_PROMPT",
    "build_evaluation_prompt",
    "build_refinement_prompt",
]
