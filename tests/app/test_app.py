from __future__ import annotations

import sys
import types

import pytest

from legisync.app import build_orchestrator, load_external_source, run_full_sync
from legisync.config import ConfigurationError, MissingConfigurationError
from legisync.domain.model import ExternalChamberMember
from tests.helpers.fakes import (
    FakeExternalSource,
    FakeRemoteStore,
    make_jurisdiction,
    make_legislation,
    make_member,
    make_session,
)


@pytest.fixture
def source_module(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    module = types.ModuleType("legisync_test_sources")
    module.instance = FakeExternalSource()  # type: ignore[attr-defined]
    module.factory = FakeExternalSource  # type: ignore[attr-defined]
    module.not_a_source = 42  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, module.__name__, module)
    return module


def test_load_external_source_accepts_instances(source_module: types.ModuleType) -> None:
    assert load_external_source("legisync_test_sources:instance") is source_module.instance


def test_load_external_source_calls_factories(
    source_module: types.ModuleType,  # noqa: ARG001
) -> None:
    assert isinstance(load_external_source("legisync_test_sources:factory"), FakeExternalSource)


def test_load_external_source_reads_environment(
    monkeypatch: pytest.MonkeyPatch,
    source_module: types.ModuleType,
) -> None:
    monkeypatch.setenv("LEGISYNC_SOURCE", "legisync_test_sources:instance")

    assert load_external_source() is source_module.instance


@pytest.mark.parametrize(
    "target",
    [
        "no_colon",
        "legisync_test_sources:missing",
        "legisync_test_sources:not_a_source",
        "legisync_missing_module:source",
    ],
)
def test_load_external_source_rejects_bad_targets(
    source_module: types.ModuleType,  # noqa: ARG001
    target: str,
) -> None:
    with pytest.raises(ConfigurationError):
        load_external_source(target)


def test_load_external_source_requires_a_target() -> None:
    with pytest.raises(MissingConfigurationError) as exc:
        load_external_source()

    assert exc.value.names == ("LEGISYNC_SOURCE",)
    assert "--source" in str(exc.value)


def test_run_full_sync_covers_every_session() -> None:
    store = FakeRemoteStore()
    source = FakeExternalSource(
        make_jurisdiction("GA"),
        sessions=[make_session("2025"), make_session("2026")],
        members={("2025", "house"): [ExternalChamberMember(member=make_member("alice"))]},
        legislation={"2025": [make_legislation("hb1")], "2026": [make_legislation("hb2")]},
    )
    orchestrator = build_orchestrator(source, remote=store, dangerously_create_jurisdiction=True)

    result = run_full_sync(orchestrator)

    assert len(result.sessions.created) == 2
    assert sum(len(item.maybe_new) for item in result.members.values()) == 1
    assert sorted(
        legislation.name_id
        for item in result.legislation.values()
        for legislation in item.created
    ) == ["HB1", "HB2"]
