from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import InMemoryMetricReader

from shopify_product_creator.telemetry import UpstreamMetrics


def test_records_duration_with_api_style(meter_provider, metric_reader):
    metrics = UpstreamMetrics(meter_provider)
    metrics.record_upstream_call(12.5, "rest")
    metrics.record_upstream_call(7.5, "rest")

    data = metric_reader.get_metrics_data()
    [metric] = [
        m
        for rm in data.resource_metrics
        for sm in rm.scope_metrics
        for m in sm.metrics
        if m.name == "product_creator.upstream.duration"
    ]
    assert metric.unit == "ms"
    [point] = metric.data.data_points
    assert point.count == 2
    assert point.sum == 20.0
    assert dict(point.attributes) == {"api_style": "rest"}


def test_shutdown_leaves_injected_provider_open():
    reader = InMemoryMetricReader()
    provider = MeterProvider(metric_readers=[reader], shutdown_on_exit=False)
    metrics = UpstreamMetrics(provider)
    metrics.shutdown()

    metrics.record_upstream_call(1.0, "graphql")
    assert reader.get_metrics_data() is not None
    provider.shutdown()


def test_shutdown_closes_owned_provider():
    metrics = UpstreamMetrics()
    calls = []
    original = metrics.meter_provider.shutdown

    def shutdown(*args, **kwargs):
        calls.append(True)
        return original(*args, **kwargs)

    metrics.meter_provider.shutdown = shutdown
    metrics.shutdown()
    assert calls == [True]
