"""End-to-end reconciliation scenarios over real HTTP parsing and SQLite."""

import asyncio

import pytest
import respx
from httpx import Response

from modelwatch.core.config import MonitorConfig
from modelwatch.monitor import MonitorOrchestrator
from modelwatch.sources import CredentialResolver, ModelFetcher, SourceRegistry, StaticCredentials
from modelwatch.store.snapshots import SnapshotStore
from tests.fakes import RecordingNotifier, RecordingSleeper, make_source

ENDPOINT = "https://api.openai.com/v1/models"


class RetryGate:
    """Retry sleep that blocks until released."""

    def __init__(self):
        self.release = asyncio.Event()
        self.waiting = 0

    async def __call__(self, seconds: float) -> None:
        self.waiting += 1
        await self.release.wait()


async def wait_until(predicate, attempts: int = 1000) -> bool:
    for _ in range(attempts):
        if predicate():
            return True
        await asyncio.sleep(0)
    return predicate()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def orchestrator(openai_source, resolver: CredentialResolver, snapshot_store, notifier):
    return MonitorOrchestrator(
        registry=SourceRegistry([openai_source]),
        resolver=resolver,
        fetcher=ModelFetcher(resolver, MonitorConfig()),
        store=snapshot_store,
        notifier=notifier,
        sleep=RecordingSleeper(),
    )


class TestScenarios:
    """First observation, addition and HTTP failure for one source."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_first_poll_then_addition_then_unauthorized(
        self, orchestrator: MonitorOrchestrator, snapshot_store: SnapshotStore, notifier
    ):
        route = respx.get(ENDPOINT)

        # First poll: one model, first observation
        route.mock(
            return_value=Response(
                200, json={"data": [{"id": "gpt-4", "created": 1, "owned_by": "openai"}]}
            )
        )
        await orchestrator.run()

        snapshot = snapshot_store.get("openai")
        assert snapshot.count == 1
        assert snapshot.resources[0].id == "gpt-4"
        assert snapshot.resources[0].created == 1
        assert snapshot.resources[0].owned_by == "openai"
        assert notifier.changes[0][1].is_first_observation is True

        # Second poll: one addition
        route.mock(
            return_value=Response(
                200,
                json={
                    "data": [
                        {"id": "gpt-4", "created": 1, "owned_by": "openai"},
                        {"id": "gpt-4o", "created": 2, "owned_by": "openai"},
                    ]
                },
            )
        )
        await orchestrator.run()

        _, changes, _ = notifier.changes[1]
        assert [r.id for r in changes.added] == ["gpt-4o"]
        assert changes.removed == ()
        assert snapshot_store.get("openai").count == 2

        # Third poll: unauthorized, snapshot untouched
        route.mock(return_value=Response(401, json={"error": "invalid_api_key"}))
        result = await orchestrator.run()

        outcome = result.outcomes[0]
        assert outcome.success is False
        assert outcome.error.startswith("HTTP 401:")
        assert notifier.failures[0][0] == "openai"
        assert snapshot_store.get("openai").count == 2
        assert len(notifier.changes) == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_unchanged_poll_is_silent(
        self, orchestrator: MonitorOrchestrator, snapshot_store: SnapshotStore, notifier
    ):
        respx.get(ENDPOINT).mock(return_value=Response(200, json={"data": [{"id": "gpt-4"}]}))
        await orchestrator.run()
        stored = snapshot_store.get("openai")

        await orchestrator.run()

        assert len(notifier.changes) == 1
        assert snapshot_store.get("openai") == stored


class TestFailureIsolation:
    """A failing source never holds back or breaks its batch siblings."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_sibling_persists_while_failing_source_waits_to_retry(self, snapshot_store, notifier):
        alpha, beta = make_source("alpha"), make_source("beta")
        resolver = CredentialResolver(StaticCredentials({}))
        gate = RetryGate()
        fetcher = ModelFetcher(resolver, MonitorConfig(max_retries=1, retry_delay=30.0), sleep=gate)
        orchestrator = MonitorOrchestrator(
            registry=SourceRegistry([alpha, beta]),
            resolver=resolver,
            fetcher=fetcher,
            store=snapshot_store,
            notifier=notifier,
            config=MonitorConfig(batch_size=5),
            sleep=RecordingSleeper(),
        )
        alpha_route = respx.get(alpha.endpoint).mock(return_value=Response(500, text="down"))
        respx.get(beta.endpoint).mock(return_value=Response(200, json={"data": [{"id": "b-1"}]}))

        task = asyncio.create_task(orchestrator.run())
        try:
            assert await wait_until(lambda: gate.waiting == 1 and snapshot_store.get("beta") is not None)
            assert not task.done()
            assert notifier.changes[0][0] == "beta"
            assert notifier.failures == []
        finally:
            gate.release.set()
        result = await task
        await fetcher.aclose()

        alpha_outcome, beta_outcome = result.outcomes
        assert alpha_outcome.success is False
        assert alpha_outcome.error.startswith("HTTP 500")
        assert alpha_route.call_count == 2
        assert beta_outcome.success is True
        assert [f[0] for f in notifier.failures] == ["alpha"]
        assert snapshot_store.get("alpha") is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_unencodable_secret_is_reported_as_failure(self, openai_source, snapshot_store, notifier):
        beta = make_source("beta")
        resolver = CredentialResolver(StaticCredentials({"OPENAI_API_KEY": "sk-ünïcode"}))
        orchestrator = MonitorOrchestrator(
            registry=SourceRegistry([openai_source, beta]),
            resolver=resolver,
            fetcher=ModelFetcher(resolver, MonitorConfig()),
            store=snapshot_store,
            notifier=notifier,
            sleep=RecordingSleeper(),
        )
        respx.get(beta.endpoint).mock(return_value=Response(200, json={"data": [{"id": "b-1"}]}))

        result = await orchestrator.run()

        openai_outcome, beta_outcome = result.outcomes
        assert openai_outcome.success is False
        assert openai_outcome.error.startswith("Invalid request header")
        assert [f[0] for f in notifier.failures] == ["openai"]
        assert beta_outcome.success is True
        assert snapshot_store.get("beta").count == 1
