"""Tests for the hook registry."""

from __future__ import annotations

import dataclasses

import pytest

from sentiment_service.config import HookConfig, ServiceConfig
from sentiment_service.hooks.errors import HookNotFound
from sentiment_service.hooks.models import HookDescriptor
from sentiment_service.hooks.registry import HookRegistry


def _descriptor(hook_id: str) -> HookDescriptor:
    return HookDescriptor(hook_id=hook_id, url_template=f"http://hooks.local/{hook_id}/%s")


class TestResolve:
    def test_explicit_id(self) -> None:
        registry = HookRegistry({"a": _descriptor("a"), "b": _descriptor("b")}, "a")
        assert registry.resolve("b").hook_id == "b"

    def test_default_used_when_id_absent(self) -> None:
        registry = HookRegistry({"a": _descriptor("a"), "b": _descriptor("b")}, "b")
        assert registry.resolve().hook_id == "b"
        assert registry.resolve("").hook_id == "b"

    def test_unknown_id_raises(self) -> None:
        registry = HookRegistry({"a": _descriptor("a")}, "a")
        with pytest.raises(HookNotFound) as exc_info:
            registry.resolve("nope")
        assert exc_info.value.hook_id == "nope"

    def test_no_id_and_no_default_raises(self) -> None:
        registry = HookRegistry({"a": _descriptor("a"), "b": _descriptor("b")})
        with pytest.raises(HookNotFound, match="no default hook"):
            registry.resolve()

    def test_empty_registry(self) -> None:
        registry = HookRegistry({})
        assert registry.hook_ids == []
        with pytest.raises(HookNotFound):
            registry.resolve("anything")

    def test_unknown_default_rejected(self) -> None:
        with pytest.raises(ValueError, match="missing"):
            HookRegistry({"a": _descriptor("a")}, "missing")


class TestImmutability:
    def test_descriptor_is_frozen(self) -> None:
        descriptor = _descriptor("a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            descriptor.key = "changed"  # type: ignore[misc]

    def test_registry_copies_input_mapping(self) -> None:
        hooks = {"a": _descriptor("a")}
        registry = HookRegistry(hooks)
        hooks["b"] = _descriptor("b")
        assert registry.hook_ids == ["a"]


class TestFromConfig:
    def test_descriptors_built_from_config(self) -> None:
        config = ServiceConfig(
            hooks={
                "captions": HookConfig(
                    url="https://media.local/captions/%s",
                    headers={"X-Token": ["one", "two"], "Accept": ["application/json"]},
                    key="series",
                    timed=True,
                ),
                "comment": HookConfig(url="https://cms.local/comments/%s"),
            },
            default_hook="comment",
        )
        registry = HookRegistry.from_config(config)

        assert registry.hook_ids == ["captions", "comment"]
        assert registry.default_hook_id == "comment"

        captions = registry.resolve("captions")
        assert captions.url_template == "https://media.local/captions/%s"
        assert captions.key == "series"
        assert captions.timed is True
        assert captions.header_items() == [
            ("X-Token", "one"),
            ("X-Token", "two"),
            ("Accept", "application/json"),
        ]

    def test_single_hook_becomes_default(self) -> None:
        config = ServiceConfig(hooks={"only": HookConfig(url="http://x.local/%s")})
        registry = HookRegistry.from_config(config)
        assert registry.default_hook_id == "only"
        assert registry.resolve().hook_id == "only"

    def test_several_hooks_without_default_logs_warning(self, caplog) -> None:
        config = ServiceConfig(
            hooks={
                "a": HookConfig(url="http://x.local/a/%s"),
                "b": HookConfig(url="http://x.local/b/%s"),
            }
        )
        with caplog.at_level("WARNING"):
            registry = HookRegistry.from_config(config)

        assert registry.default_hook_id == ""
        assert "defaultHook" in caplog.text
