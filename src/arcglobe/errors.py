# SPDX-License-Identifier: Apache-2.0
"""Exception types raised by the arcglobe pipeline."""

from __future__ import annotations


class ArcGlobeError(Exception):
    """Base class for arcglobe errors."""


class InvalidColorFormat(ArcGlobeError, ValueError):
    """Raised when an arc color is not a ``#rrggbb`` / ``#rgb`` hex string."""

    def __init__(
        self, color: object, *, index: int | None = None, order: int | None = None
    ) -> None:
        self.color = color
        self.index = index
        self.order = order
        where = ""
        if index is not None:
            where = f" for arc #{index}"
            if order is not None:
                where += f" (order {order})"
        super().__init__(f"Invalid hex color{where}: {color!r}")


class ArcDataError(ArcGlobeError):
    """Raised when an arc payload cannot be parsed."""


class CountryDatasetError(ArcGlobeError):
    """Raised when a country-boundary dataset cannot be loaded."""


class MissingCollaboratorData(ArcGlobeError):
    """Raised when data owned by a collaborator is read before it is available."""


class GlobeConfigError(ArcGlobeError, ValueError):
    """Raised when a globe config file cannot be parsed."""
