import pytest
from prometheus_client import REGISTRY
from prometheus_client.parser import text_string_to_metric_families

from mobyt_exporter.models.schemas import MetricsSnapshot
from mobyt_exporter.observability.metrics import (
    DESCRIPTORS,
    SMS_CREDIT,
    SMS_MONEY,
    SMS_SENT,
    UP,
    get_content_type,
    render_snapshot,
)

from conftest import FIXED_NOW


def _parse(output: bytes):
    samples = {}
    for family in text_string_to_metric_families(output.decode()):
        assert family.type == "gauge"
        for sample in family.samples:
            samples[sample.name] = (sample.labels, sample.value)
    return samples


def test_descriptor_names_and_labels():
    assert set(DESCRIPTORS) == {"mobyt_up", "mobyt_sms_sent", "mobyt_sms_money", "mobyt_sms_credit"}
    assert UP.label_names == ()
    assert SMS_SENT.label_names == ("sender",)
    assert SMS_MONEY.label_names == ("sender",)
    assert SMS_CREDIT.label_names == ("type",)


def test_sample_rejects_undeclared_label():
    with pytest.raises(ValueError):
        SMS_CREDIT.sample(1, sender="x")


def test_render_full_snapshot():
    snapshot = MetricsSnapshot(
        started_at=FIXED_NOW,
        samples=[UP.sample(1), SMS_MONEY.sample(921.9), SMS_CREDIT.sample(11815), SMS_SENT.sample(1)],
    )

    samples = _parse(render_snapshot(snapshot))

    assert samples == {
        "mobyt_up": ({}, 1.0),
        "mobyt_sms_money": ({"sender": ""}, 921.9),
        "mobyt_sms_credit": ({"type": ""}, 11815.0),
        "mobyt_sms_sent": ({"sender": ""}, 1.0),
    }


def test_render_down_snapshot_has_only_up():
    output = render_snapshot(MetricsSnapshot(started_at=FIXED_NOW, samples=[UP.sample(0)]))

    assert _parse(output) == {"mobyt_up": ({}, 0.0)}
    assert b"# HELP mobyt_up Was the last Mobyt query successful." in output


def test_render_does_not_touch_global_registry():
    render_snapshot(MetricsSnapshot(started_at=FIXED_NOW, samples=[UP.sample(1)]))
    assert REGISTRY.get_sample_value("mobyt_up") is None


def test_content_type_is_text_exposition():
    assert get_content_type().startswith("text/plain")
