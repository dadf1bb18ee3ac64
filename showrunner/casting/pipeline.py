"""
Showrunner Casting Pipeline

Generates casting profiles for an ordered registry in batches:
1. plan_batches     - split the registry into contiguous batches
2. generate_batches - one generation call per batch, retried once with a
                      larger token budget when the response looks truncated
3. merge_profiles   - one profile per registry character, placeholders for
                      anything a failed or partial batch left out

A failing batch never aborts the run.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional

from showrunner.core.config import CastingConfig
from showrunner.core.exceptions import EmptyRegistryError
from showrunner.core.logging_config import get_logger
from showrunner.characters.batching import partition
from showrunner.characters.models import CharacterIdentity
from showrunner.characters.registry import registry_summary
from showrunner.llm.response_decoder import DecodeResult, ResilientResponseDecoder, looks_truncated
from showrunner.pipelines.base_pipeline import BasePipeline, PipelineStep
from showrunner.casting.merger import CastingMerger
from showrunner.casting.models import CastingProfile
from showrunner.casting.prompts import CASTING_SYSTEM_PROMPT, build_casting_prompt

LLMCaller = Callable[..., Awaitable[str]]
PromptBuilder = Callable[[List[CharacterIdentity], Dict[str, Any]], str]


def token_budget(batch_len: int, config: Optional[CastingConfig] = None) -> int:
    """Per-batch token limit: tokens per character, clamped to the floor and ceiling."""
    config = config or CastingConfig()
    return max(config.min_batch_tokens, min(config.max_batch_tokens, batch_len * config.tokens_per_character))


class CastingPipeline(BasePipeline[List[CharacterIdentity], List[CastingProfile]]):
    """
    Batch casting profile generation.

    Args:
        llm_caller: Async callable taking prompt, system_prompt and max_tokens
            keyword arguments and returning the response text
        config: Casting settings (batch size, token budget, decode keys)
        prompt_builder: Builds the user prompt for one batch
        max_concurrent_batches: Max generation calls in flight
        logger: Optional logger override
    """

    def __init__(
        self,
        llm_caller: LLMCaller,
        config: Optional[CastingConfig] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        max_concurrent_batches: int = 3,
        logger: Optional[logging.Logger] = None
    ):
        self.llm_caller = llm_caller
        self.config = config or CastingConfig()
        self.prompt_builder = prompt_builder or build_casting_prompt
        self.logger = logger or get_logger("casting.pipeline")
        self.decoder = ResilientResponseDecoder(
            self.config.identity_field,
            self.config.array_key,
            logger=self.logger
        )
        self._semaphore = asyncio.Semaphore(max_concurrent_batches)
        super().__init__("casting")

    def _define_steps(self) -> None:
        self._steps = [
            PipelineStep("plan_batches", "Split the registry into batches"),
            PipelineStep("generate_batches", "Generate and decode profiles per batch"),
            PipelineStep("merge_profiles", "Merge batch results onto the registry"),
        ]

    async def _execute_step(
        self,
        step: PipelineStep,
        input_data: Any,
        context: Dict[str, Any]
    ) -> Any:
        if step.name == "plan_batches":
            return self._plan(input_data, context)
        if step.name == "generate_batches":
            return await self._generate(input_data, context)
        if step.name == "merge_profiles":
            return self._merge(input_data, context)
        raise ValueError(f"Unknown step: {step.name}")

    def _plan(self, registry: List[CharacterIdentity], context: Dict[str, Any]) -> List[List[CharacterIdentity]]:
        if not registry:
            raise EmptyRegistryError()
        batches = partition(registry, self.config.batch_size)
        context["merger"] = CastingMerger(registry, self.config.identity_field, logger=self.logger)
        self.logger.info(
            f"Splitting {len(registry)} character(s) into {len(batches)} batch(es) "
            f"{registry_summary(registry)}"
        )
        return batches

    async def _generate(self, batches: List[List[CharacterIdentity]], context: Dict[str, Any]) -> CastingMerger:
        merger: CastingMerger = context["merger"]
        results = await asyncio.gather(
            *[self._run_batch(i, batch, context) for i, batch in enumerate(batches)],
            return_exceptions=True
        )

        tiers: List[str] = []
        for i, (batch, result) in enumerate(zip(batches, results)):
            if isinstance(result, BaseException):
                message = f"Batch {i + 1} failed: {result}"
                self.logger.error(message)
                merger.fail_batch(batch, message)
                continue
            tiers.append(result.tier.value)
            matched = merger.add_batch(result.records)
            if matched < len(batch):
                self.logger.warning(
                    f"Batch {i + 1} returned {matched}/{len(batch)} profile(s), backfilling placeholders"
                )

        context["metadata"] = {
            "batch_count": len(batches),
            "failed_batches": len(merger.errors),
            "decode_tiers": tiers,
            "batch_errors": list(merger.errors),
        }
        return merger

    def _merge(self, merger: CastingMerger, context: Dict[str, Any]) -> List[CastingProfile]:
        profiles = merger.profiles()
        placeholders = sum(1 for p in profiles if p.needs_regeneration)
        context.setdefault("metadata", {})["placeholder_count"] = placeholders
        if placeholders:
            self.logger.warning(f"{placeholders} profile(s) need regeneration")
        return profiles

    async def _run_batch(
        self,
        index: int,
        batch: List[CharacterIdentity],
        context: Dict[str, Any]
    ) -> DecodeResult:
        async with self._semaphore:
            prompt = self.prompt_builder(batch, context)
            tokens = token_budget(len(batch), self.config)
            self.logger.debug(f"Batch {index + 1}: {len(batch)} character(s), token limit {tokens}")

            response = await self.llm_caller(
                prompt=prompt,
                system_prompt=CASTING_SYSTEM_PROMPT,
                max_tokens=tokens
            )

            if looks_truncated(response) and tokens < self.config.max_batch_tokens:
                retry_tokens = min(self.config.max_batch_tokens, tokens * 2)
                self.logger.warning(
                    f"Batch {index + 1} response looks truncated, retrying with {retry_tokens} tokens"
                )
                response = await self.llm_caller(
                    prompt=prompt,
                    system_prompt=CASTING_SYSTEM_PROMPT,
                    max_tokens=retry_tokens
                )

            return self.decoder.decode_with_report(response)
