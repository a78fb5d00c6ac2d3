"""Single chart resource bound to one render target."""

import logging
from typing import Callable, Protocol

from cityweather.models.forecast import ChartProjection

logger = logging.getLogger(__name__)

SERIES_LABEL = "Temperature (°C)"


class Chart(Protocol):
    def dispose(self) -> None: ...


ChartFactory = Callable[[ChartProjection, str], Chart]


class ChartSlot:
    """Holds at most one live chart.

    The previous chart is always disposed before the next one is created,
    and ``dispose`` is safe to call any number of times.
    """

    def __init__(self, factory: ChartFactory):
        self.factory = factory
        self.chart: Chart | None = None

    def replace(self, projection: ChartProjection, title: str) -> Chart:
        self.dispose()
        self.chart = self.factory(projection, title)
        return self.chart

    def dispose(self) -> None:
        chart, self.chart = self.chart, None
        if chart is not None:
            logger.debug("Disposing chart %r", chart)
            chart.dispose()


class TextChart:
    """Plain-text line chart for terminals: one bar per hourly sample."""

    def __init__(self, projection: ChartProjection, title: str, width: int = 40):
        self.projection = projection
        self.title = title
        self.width = width
        self.disposed = False

    def render(self) -> str:
        if self.disposed:
            raise RuntimeError("chart already disposed")
        lines = [self.title, SERIES_LABEL]
        present = [v for v in self.projection.values if v is not None]
        if not present:
            lines.append("(no data in range)")
            return "\n".join(lines)
        low, high = min(present), max(present)
        span = (high - low) or 1.0
        for label, value in zip(self.projection.labels, self.projection.values):
            if value is None:
                lines.append(f"{label} |")
                continue
            bar = "#" * (1 + round((value - low) / span * (self.width - 1)))
            lines.append(f"{label} |{bar} {value:.1f}")
        return "\n".join(lines)

    def dispose(self) -> None:
        self.disposed = True
