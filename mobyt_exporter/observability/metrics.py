"""
Mobyt Exporter - Prometheus Metrics

Metrics exposed:
1. mobyt_up (Gauge) - Was the last Mobyt query successful
2. mobyt_sms_sent (Gauge) - SMS sent during the last hour, by sender
3. mobyt_sms_money (Gauge) - Account balance, by sender
4. mobyt_sms_credit (Gauge) - Remaining SMS, by message type

Nothing is registered on the global prometheus_client registry: each scrape
renders its own snapshot through a throwaway CollectorRegistry.
"""
import logging
from typing import Dict, Iterator, Sequence, Tuple

from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from prometheus_client.core import CollectorRegistry, GaugeMetricFamily

from mobyt_exporter.models.schemas import MetricSample, MetricsSnapshot

logger = logging.getLogger(__name__)

NAMESPACE = "mobyt"


class MetricDescriptor:
    """Name, help text and label dimensions of one gauge"""

    def __init__(self, name: str, documentation: str, label_names: Sequence[str] = ()):
        self.name = f"{NAMESPACE}_{name}"
        self.documentation = documentation
        self.label_names: Tuple[str, ...] = tuple(label_names)

    def sample(self, value: float, **labels: str) -> MetricSample:
        """Build a sample, defaulting every declared label to the empty string"""
        unknown = set(labels) - set(self.label_names)
        if unknown:
            raise ValueError(f"{self.name} has no label(s) {sorted(unknown)}")
        values = {name: labels.get(name, "") for name in self.label_names}
        return MetricSample(
            name=self.name,
            documentation=self.documentation,
            value=float(value),
            labels=values,
        )


# =============================================================================
# Descriptors
# =============================================================================

UP = MetricDescriptor("up", "Was the last Mobyt query successful.")

SMS_SENT = MetricDescriptor("sms_sent", "Number of sms sent since one hour.", ["sender"])

SMS_MONEY = MetricDescriptor("sms_money", "Account current money", ["sender"])

SMS_CREDIT = MetricDescriptor("sms_credit", "Number of remaining sms.", ["type"])

DESCRIPTORS: Dict[str, MetricDescriptor] = {
    d.name: d for d in (UP, SMS_SENT, SMS_MONEY, SMS_CREDIT)
}


# =============================================================================
# Exposition
# =============================================================================

class SnapshotCollector:
    """prometheus_client custom collector yielding one snapshot's gauges"""

    def __init__(self, snapshot: MetricsSnapshot):
        self.snapshot = snapshot

    def collect(self) -> Iterator[GaugeMetricFamily]:
        families: Dict[str, GaugeMetricFamily] = {}
        for sample in self.snapshot.samples:
            family = families.get(sample.name)
            if family is None:
                family = GaugeMetricFamily(
                    sample.name,
                    sample.documentation,
                    labels=list(sample.labels),
                )
                families[sample.name] = family
            family.add_metric(list(sample.labels.values()), sample.value)
        yield from families.values()


def render_snapshot(snapshot: MetricsSnapshot) -> bytes:
    """Render a snapshot in the Prometheus text exposition format"""
    registry = CollectorRegistry(auto_describe=False)
    registry.register(SnapshotCollector(snapshot))
    return generate_latest(registry)


def get_content_type() -> str:
    """Get Prometheus content type"""
    return CONTENT_TYPE_LATEST
