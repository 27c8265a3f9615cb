"""Errors raised while reading legisync's ``LEGISYNC_*`` settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


class ConfigurationError(RuntimeError):
    """A setting is present but unusable, e.g. a non-numeric page size."""


class MissingConfigurationError(ConfigurationError):
    """Required variables such as ``LEGISYNC_API_URL`` are unset or blank.

    ``names`` lists every missing variable so a single run reports them all.
    """

    def __init__(self, names: Iterable[str], *, hint: str | None = None) -> None:
        self.names = tuple(sorted(names))
        message = f"Missing configuration for: {', '.join(self.names)}"
        super().__init__(f"{message} ({hint})" if hint else message)
