"""Read-only registry of configured hooks."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from sentiment_service.config import ServiceConfig
from sentiment_service.hooks.errors import HookNotFound
from sentiment_service.hooks.models import HookDescriptor

logger = logging.getLogger(__name__)


class HookRegistry:
    """Maps hook ids to descriptors and knows which hook is the default.

    Built once at startup and never mutated, so it is shared between request
    threads without locking.
    """

    def __init__(self, hooks: Mapping[str, HookDescriptor], default_hook_id: str = "") -> None:
        if default_hook_id and default_hook_id not in hooks:
            raise ValueError(f"Default hook {default_hook_id!r} is not a configured hook")
        self._hooks = MappingProxyType(dict(hooks))
        self._default_hook_id = default_hook_id

    @classmethod
    def from_config(cls, config: ServiceConfig) -> HookRegistry:
        """Build a registry from the loaded service configuration.

        Without an explicit ``defaultHook``, a single configured hook becomes
        the default. With several hooks and no default, requests must name
        their hook.
        """
        hooks = {
            hook_id: HookDescriptor(
                hook_id=hook_id,
                url_template=hook.url,
                headers=tuple((name, tuple(values)) for name, values in hook.headers.items()),
                key=hook.key,
                timed=hook.timed,
            )
            for hook_id, hook in config.hooks.items()
        }

        default_hook_id = config.default_hook
        if not default_hook_id and len(hooks) == 1:
            default_hook_id = next(iter(hooks))
        elif not default_hook_id and len(hooks) > 1:
            logger.warning(
                "%d hooks configured without a defaultHook; task requests must pass hookId",
                len(hooks),
            )

        return cls(hooks, default_hook_id)

    @property
    def default_hook_id(self) -> str:
        return self._default_hook_id

    @property
    def hook_ids(self) -> list[str]:
        return sorted(self._hooks)

    def resolve(self, requested_id: str | None = None) -> HookDescriptor:
        """Return the descriptor for ``requested_id``, or the default hook.

        Raises:
            HookNotFound: If the requested id is unknown, or no id was given
                and there is no default hook.
        """
        hook_id = requested_id or self._default_hook_id
        descriptor = self._hooks.get(hook_id) if hook_id else None
        if descriptor is None:
            raise HookNotFound(hook_id)
        return descriptor
