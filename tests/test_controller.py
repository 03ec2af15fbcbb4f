import asyncio
from typing import List, Optional

import pytest

from api_client import ApiResult
from controller import DashboardController
from models import DEFAULT_USER, Event, UserInfo
from state import Initializing, Ready


def _event(event_id: int, event_type: str = "Interview") -> Event:
    return Event(id=event_id, company_name=f"Company {event_id}", event_type=event_type)


class FakeApi:
    def __init__(
        self,
        batches: Optional[List[tuple]] = None,
        *,
        events_ok: bool = True,
        user: Optional[UserInfo] = None,
        sync_ok: bool = True,
        logout_ok: bool = True,
    ) -> None:
        self.batches = list(batches or [()])
        self.events_ok = events_ok
        self.user = user
        self.sync_ok = sync_ok
        self.logout_ok = logout_ok
        self.calls: List[str] = []
        self.events_gate: Optional[asyncio.Event] = None
        self.user_gate: Optional[asyncio.Event] = None
        self.sync_gate: Optional[asyncio.Event] = None

    async def list_events(self) -> ApiResult:
        self.calls.append("list_events")
        if self.events_gate is not None:
            await self.events_gate.wait()
        if not self.events_ok:
            return ApiResult((), "network down")
        batch = self.batches.pop(0) if len(self.batches) > 1 else self.batches[0]
        return ApiResult(tuple(batch))

    async def get_user_info(self) -> ApiResult:
        self.calls.append("get_user_info")
        if self.user_gate is not None:
            await self.user_gate.wait()
        if self.user is None:
            return ApiResult(DEFAULT_USER, "unauthorized")
        return ApiResult(self.user)

    async def trigger_sync(self) -> ApiResult:
        self.calls.append("trigger_sync")
        if self.sync_gate is not None:
            await self.sync_gate.wait()
        return ApiResult(None, None if self.sync_ok else "sync failed")

    async def logout(self) -> ApiResult:
        self.calls.append("logout")
        return ApiResult(None, None if self.logout_ok else "logout failed")


async def _settle() -> None:
    for _ in range(5):
        await asyncio.sleep(0)


def test_initial_load_populates_events_and_user() -> None:
    api = FakeApi([(_event(1), _event(2, "Exam"))], user=UserInfo("Ada", "ada@example.com"))
    controller = DashboardController(api, navigate=lambda route: None)
    assert controller.state.loading

    asyncio.run(controller.initial_load())

    assert not controller.state.loading
    assert isinstance(controller.state.phase, Ready)
    assert [ev.id for ev in controller.state.events] == [1, 2]
    assert controller.state.user.name == "Ada"


def test_ready_does_not_wait_for_user_info() -> None:
    async def scenario() -> None:
        api = FakeApi([(_event(1),)], user=UserInfo("Ada", ""))
        api.user_gate = asyncio.Event()
        controller = DashboardController(api, navigate=lambda route: None)

        task = asyncio.create_task(controller.initial_load())
        await _settle()

        assert not controller.state.loading
        assert controller.state.user == DEFAULT_USER

        api.user_gate.set()
        await task
        assert controller.state.user.name == "Ada"

    asyncio.run(scenario())


def test_failed_mount_yields_empty_ready_dashboard() -> None:
    api = FakeApi(events_ok=False)
    changes = []
    controller = DashboardController(
        api, navigate=lambda route: None, on_change=lambda: changes.append(1)
    )

    asyncio.run(controller.initial_load())

    assert controller.state.events == ()
    assert controller.state.loading is False
    assert controller.state.user == DEFAULT_USER
    assert changes


def test_sync_reloads_after_failed_sync() -> None:
    api = FakeApi([(_event(1),), (_event(1), _event(2, "Exam"))], sync_ok=False)
    controller = DashboardController(api, navigate=lambda route: None)

    async def scenario() -> bool:
        await controller.initial_load()
        return await controller.trigger_sync_workflow()

    assert asyncio.run(scenario()) is True
    assert [ev.id for ev in controller.state.events] == [1, 2]
    assert controller.state.syncing is False
    sync_idx = api.calls.index("trigger_sync")
    assert api.calls[sync_idx + 1 :] == ["list_events"]


def test_sync_clears_syncing_flag_when_client_raises() -> None:
    class BrokenSyncApi(FakeApi):
        async def trigger_sync(self) -> ApiResult:
            raise RuntimeError("boom")

    controller = DashboardController(BrokenSyncApi([(_event(1),)]), navigate=lambda route: None)

    async def scenario() -> None:
        await controller.initial_load()
        await controller.trigger_sync_workflow()

    with pytest.raises(RuntimeError):
        asyncio.run(scenario())
    assert controller.state.syncing is False
    assert [ev.id for ev in controller.state.events] == [1]


def test_initial_load_leaves_loading_when_client_raises() -> None:
    class BrokenEventsApi(FakeApi):
        async def list_events(self) -> ApiResult:
            raise RuntimeError("boom")

    controller = DashboardController(BrokenEventsApi(), navigate=lambda route: None)

    with pytest.raises(RuntimeError):
        asyncio.run(controller.initial_load())
    assert controller.state.loading is False
    assert controller.state.events == ()


def test_second_sync_while_syncing_is_ignored() -> None:
    async def scenario() -> None:
        api = FakeApi([(_event(1),)])
        controller = DashboardController(api, navigate=lambda route: None)
        await controller.initial_load()

        api.sync_gate = asyncio.Event()
        first = asyncio.create_task(controller.trigger_sync_workflow())
        await _settle()
        assert controller.state.syncing
        assert controller.state.phase == Ready(syncing=True)

        assert await controller.trigger_sync_workflow() is False
        assert api.calls.count("trigger_sync") == 1

        api.sync_gate.set()
        assert await first is True
        assert api.calls.count("trigger_sync") == 1
        assert api.calls.count("list_events") == 2
        assert controller.state.syncing is False

    asyncio.run(scenario())


def test_sync_is_ignored_until_first_load_resolves() -> None:
    api = FakeApi()
    controller = DashboardController(api, navigate=lambda route: None)

    assert asyncio.run(controller.trigger_sync_workflow()) is False
    assert api.calls == []
    assert isinstance(controller.state.phase, Initializing)


@pytest.mark.parametrize("logout_ok", [True, False])
def test_logout_always_navigates_to_login(logout_ok: bool) -> None:
    routes = []
    api = FakeApi(logout_ok=logout_ok)
    controller = DashboardController(api, navigate=routes.append)

    asyncio.run(controller.logout_workflow())

    assert api.calls == ["logout"]
    assert routes == ["login"]


def test_logout_navigates_even_if_client_raises() -> None:
    routes = []

    class BrokenApi(FakeApi):
        async def logout(self) -> ApiResult:
            raise RuntimeError("boom")

    controller = DashboardController(BrokenApi(), navigate=routes.append)

    with pytest.raises(RuntimeError):
        asyncio.run(controller.logout_workflow())
    assert routes == ["login"]


def test_set_filter_narrows_visible_events() -> None:
    api = FakeApi([(_event(1), _event(2, "Workshop"), _event(3, "Exam"))])
    controller = DashboardController(api, navigate=lambda route: None)
    asyncio.run(controller.initial_load())

    controller.set_filter("Other")
    assert [ev.id for ev in controller.visible_events()] == [2]

    controller.set_filter("Deadline")
    assert controller.state.filter == "All"
    assert len(controller.visible_events()) == 3


def test_results_after_close_are_discarded() -> None:
    async def scenario() -> None:
        api = FakeApi([(_event(1),)])
        api.events_gate = asyncio.Event()
        controller = DashboardController(api, navigate=lambda route: None)

        task = asyncio.create_task(controller.initial_load())
        await _settle()
        controller.close()
        api.events_gate.set()
        await task

        assert controller.state.loading
        assert controller.state.events == ()

    asyncio.run(scenario())
