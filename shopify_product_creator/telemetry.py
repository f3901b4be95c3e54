"""OpenTelemetry metrics for upstream product-creation calls."""

from typing import Optional
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import ConsoleMetricExporter, PeriodicExportingMetricReader


class UpstreamMetrics:
    """
    Records how long each Shopify create call takes, per api style.

    Without a provider a console-exporting one is created, owned and shut
    down by ``shutdown``. A provider passed in stays the caller's to close.

    Args:
        meter_provider: Optional provider, e.g. backed by an InMemoryMetricReader
    """

    def __init__(self, meter_provider: Optional[MeterProvider] = None):
        if meter_provider is None:
            reader = PeriodicExportingMetricReader(ConsoleMetricExporter())
            meter_provider = MeterProvider(metric_readers=[reader], shutdown_on_exit=False)
            self._owns_provider = True
        else:
            self._owns_provider = False
        self.meter_provider = meter_provider

        meter = meter_provider.get_meter("shopify_product_creator")
        self.upstream_duration = meter.create_histogram(
            name="product_creator.upstream.duration",
            unit="ms",
            description="Duration of Shopify product creation calls",
        )

    def record_upstream_call(self, duration_ms: float, api_style: str) -> None:
        self.upstream_duration.record(duration_ms, attributes={"api_style": api_style})

    def shutdown(self) -> None:
        if self._owns_provider:
            self.meter_provider.shutdown()
