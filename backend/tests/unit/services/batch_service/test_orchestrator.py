"""Tests for concurrent batch fan-out with per-item isolation."""

import asyncio

from studio.models.generate import BatchItem
from studio.services.batch_service.orchestrator import BatchOrchestrator


def make_items(count):
    return [
        BatchItem(reference_image_id=f"ref-{i}", variables={"flower_name": f"f{i}"})
        for i in range(count)
    ]


def test_failing_prompt_only_affects_its_item():
    def resolve_prompt(item):
        if item.reference_image_id == "ref-1":
            raise KeyError("flower_name")
        return f"prompt {item.variables['flower_name']}"

    async def generate(prompt):
        return [f"https://img.test/{prompt.replace(' ', '-')}"]

    results = asyncio.run(
        BatchOrchestrator().run(make_items(3), resolve_prompt, generate)
    )

    assert [r.reference_image_id for r in results] == ["ref-0", "ref-1", "ref-2"]
    assert results[0].image_urls == ["https://img.test/prompt-f0"]
    assert results[0].processed_prompt == "prompt f0"
    assert results[0].error is None

    assert results[1].image_urls == []
    assert results[1].processed_prompt == ""
    assert results[1].error

    assert results[2].image_urls == ["https://img.test/prompt-f2"]


def test_failing_generation_keeps_processed_prompt():
    async def generate(prompt):
        if prompt.endswith("f0"):
            raise RuntimeError("upstream down")
        return ["https://img.test/ok"]

    results = asyncio.run(
        BatchOrchestrator().run(
            make_items(2), lambda item: f"prompt {item.variables['flower_name']}", generate
        )
    )

    assert results[0].error == "upstream down"
    assert results[0].processed_prompt == "prompt f0"
    assert results[1].error is None


def test_items_run_concurrently():
    started = []

    async def scenario():
        gate = asyncio.Event()

        async def generate(prompt):
            started.append(prompt)
            if len(started) == 3:
                gate.set()
            await asyncio.wait_for(gate.wait(), timeout=1)
            return [prompt]

        return await BatchOrchestrator().run(
            make_items(3), lambda item: item.reference_image_id, generate
        )

    results = asyncio.run(scenario())

    assert all(r.error is None for r in results)
    assert sorted(started) == ["ref-0", "ref-1", "ref-2"]


def test_serialized_with_camel_case_keys():
    async def generate(prompt):
        return ["u"]

    result = asyncio.run(
        BatchOrchestrator().run(make_items(1), lambda item: "p", generate)
    )[0]

    dumped = result.model_dump(by_alias=True)
    assert dumped["referenceImageId"] == "ref-0"
    assert dumped["processedPrompt"] == "p"
    assert dumped["imageUrls"] == ["u"]
