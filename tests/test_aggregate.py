"""Test API metrics aggregation over message logs."""

import json
import logging

from apimetrics.charts import render_history_chart
from apimetrics.messages.models import LogMessage
from apimetrics.metrics import combined_tokens, get_api_metrics, model_rows, provider_rows
from apimetrics.types import MessageType


def _req(ts: int, **payload) -> LogMessage:
    return LogMessage(ts=ts, type=MessageType.SAY, say="api_req_started", text=json.dumps(payload))


def _raw(ts: int, text, say: str = "api_req_started", type_: MessageType = MessageType.SAY) -> LogMessage:
    return LogMessage(ts=ts, type=type_, say=say, text=text)


def test_empty_log():
    m = get_api_metrics([])
    assert m.total_tokens_in == 0
    assert m.total_tokens_out == 0
    assert m.total_cost == 0
    assert m.context_tokens == 0
    assert m.total_duration == 0
    assert m.request_count == 0
    assert m.average_duration == 0
    assert m.total_cache_writes is None
    assert m.total_cache_reads is None
    assert m.requests_by_provider == {}
    assert m.duration_by_model == {}
    assert m.performance_history == []


def test_single_request():
    m = get_api_metrics([
        _req(1000, tokensIn=10, tokensOut=20, cost=0.005, duration=150,
             provider="openai", modelId="gpt-4"),
    ])
    assert m.total_tokens_in == 10
    assert m.total_tokens_out == 20
    assert m.total_cost == 0.005
    assert m.total_duration == 150
    assert m.request_count == 1
    assert m.average_duration == 150
    assert m.requests_by_provider == {"openai": 1}
    assert m.duration_by_provider == {"openai": 150}
    assert m.requests_by_model == {"gpt-4": 1}
    assert m.context_tokens == 30
    entry = m.performance_history[0]
    assert (entry.ts, entry.duration, entry.provider, entry.model_id) == (1000, 150, "openai", "gpt-4")


def test_duration_from_start_and_end_time():
    m = get_api_metrics([
        _req(1000, tokensIn=1, duration=100, provider="a"),
        _req(2000, tokensIn=1, startTime=1000, endTime=1300, provider="a"),
    ])
    assert [e.duration for e in m.performance_history] == [100, 300]
    assert m.total_duration == 400
    assert m.duration_by_provider == {"a": 400}
    assert m.average_duration == 200


def test_explicit_duration_wins_over_times():
    m = get_api_metrics([_req(1, duration=50, startTime=0, endTime=999)])
    assert m.total_duration == 50


def test_invalid_json_is_skipped(caplog):
    with caplog.at_level(logging.WARNING, logger="apimetrics.metrics.aggregate"):
        m = get_api_metrics([
            _raw(1000, "not json"),
            _req(2000, tokensIn=5, duration=10),
        ])
    assert m.request_count == 1
    assert m.total_tokens_in == 5
    assert "Skipping api_req_started" in caplog.text


def test_non_object_payloads_are_skipped():
    m = get_api_metrics([_raw(1, "[1, 2]"), _raw(2, "42"), _raw(3, "null"), _raw(4, "NaN")])
    assert m.request_count == 0


def test_zero_duration_counts_request_only():
    m = get_api_metrics([_req(1000, tokensIn=3, duration=0, provider="openai", modelId="gpt-4")])
    assert m.request_count == 1
    assert m.total_tokens_in == 3
    assert m.total_duration == 0
    assert m.average_duration == 0
    assert m.performance_history == []
    assert m.requests_by_provider == {}
    assert m.requests_by_model == {}


def test_negative_derived_duration_is_excluded():
    m = get_api_metrics([_req(1, startTime=2000, endTime=1500, provider="p")])
    assert m.request_count == 1
    assert m.total_duration == 0
    assert m.performance_history == []
    assert m.duration_by_provider == {}


def test_payload_without_numbers_counts_request_only():
    m = get_api_metrics([_req(1, provider="p", note="hello")])
    assert m.request_count == 1
    assert m.total_tokens_in == 0
    assert m.total_cost == 0
    assert m.context_tokens == 0


def test_untagged_and_textless_messages_ignored():
    m = get_api_metrics([
        _raw(1, json.dumps({"tokensIn": 100, "duration": 5}), say="text"),
        _raw(2, json.dumps({"tokensIn": 100, "duration": 5}), say=None, type_=MessageType.ASK),
        _raw(3, None),
        _raw(4, ""),
    ])
    assert m.request_count == 0
    assert m.total_tokens_in == 0


def test_cache_totals_upgrade_from_unset():
    m = get_api_metrics([_req(1, tokensIn=1), _req(2, cacheWrites=0), _req(3, cacheWrites=7)])
    assert m.total_cache_writes == 7
    assert m.total_cache_reads is None

    m = get_api_metrics([_req(1, cacheReads=4), _req(2, cacheReads=6)])
    assert m.total_cache_reads == 10


def test_non_numeric_fields_are_ignored():
    m = get_api_metrics([_req(1, tokensIn="10", tokensOut=True, cost=None, duration="5", tokensOut2=3)])
    assert m.request_count == 1
    assert m.total_tokens_in == 0
    assert m.total_tokens_out == 0
    assert m.total_duration == 0


def test_overflowing_numbers_are_ignored():
    m = get_api_metrics([
        _raw(1, '{"tokensIn": 1e400, "duration": 1e400, "cost": -1e400, "provider": "p"}'),
        _raw(2, '{"tokensOut": 1' + "0" * 400 + ', "startTime": 0, "endTime": 25, "provider": "p"}'),
    ])
    assert m.request_count == 2
    assert m.total_tokens_in == 0
    assert m.total_tokens_out == 0
    assert m.total_cost == 0
    assert m.total_duration == 25
    assert m.duration_by_provider == {"p": 25}
    assert "25ms" in render_history_chart(m.performance_history)


def test_deeply_nested_payload_is_skipped(caplog):
    with caplog.at_level(logging.WARNING, logger="apimetrics.metrics.aggregate"):
        m = get_api_metrics([
            _raw(1, "[" * 100_000),
            _raw(2, '{"a": ' * 100_000),
            _req(3, tokensIn=5, duration=10),
        ])
    assert m.request_count == 1
    assert m.total_tokens_in == 5
    assert m.context_tokens == 5
    assert caplog.text.count("Skipping api_req_started") == 2


def test_context_tokens_from_last_request_with_tokens():
    m = get_api_metrics([
        _req(1, tokensIn=10, tokensOut=10),
        _req(2, tokensIn=100, tokensOut=50, cacheWrites=5, cacheReads=5),
        _req(3, tokensIn=0, tokensOut=0),
        _raw(4, "broken"),
        _raw(5, json.dumps({"tokensIn": 999}), say="text"),
    ])
    assert m.context_tokens == 160


def test_context_tokens_with_duplicate_messages():
    dup = {"tokensIn": 4, "tokensOut": 6, "duration": 10}
    m = get_api_metrics([_req(1, **dup), _req(1, **dup)])
    assert m.context_tokens == 10
    assert m.request_count == 2


def test_provider_and_model_maps_keep_first_seen_order():
    m = get_api_metrics([
        _req(1, duration=10, provider="zeta", modelId="m2"),
        _req(2, duration=20, provider="alpha", modelId="m1"),
        _req(3, duration=30, provider="zeta", modelId="m2"),
        _req(4, duration=40, provider="", modelId=""),
        _req(5, duration=50, provider="Zeta"),
    ])
    assert list(m.requests_by_provider) == ["zeta", "alpha", "Zeta"]
    assert m.requests_by_provider["zeta"] == 2
    assert m.duration_by_provider["zeta"] == 40
    assert list(m.requests_by_model) == ["m2", "m1"]
    assert len(m.performance_history) == 5


def test_history_keeps_input_order():
    m = get_api_metrics([_req(3000, duration=1), _req(1000, duration=2), _req(2000, duration=3)])
    assert [e.ts for e in m.performance_history] == [3000, 1000, 2000]


def test_average_uses_all_requests():
    m = get_api_metrics([_req(1, duration=300), _req(2, duration=0), _req(3)])
    assert m.request_count == 3
    assert m.total_duration == 300
    assert m.average_duration == 100


def test_idempotent_and_input_untouched():
    messages = [
        _req(1, tokensIn=10, cost=0.5, duration=100, provider="p", modelId="m"),
        _raw(2, "oops"),
        _req(3, cacheReads=2, startTime=10, endTime=30),
    ]
    before = [msg.model_dump() for msg in messages]
    first = get_api_metrics(messages)
    second = get_api_metrics(messages)
    assert first == second
    assert first.to_dict() == second.to_dict()
    assert [msg.model_dump() for msg in messages] == before


def test_to_dict_omits_unset_cache_totals():
    data = get_api_metrics([_req(1, tokensIn=1, duration=5, provider="p")]).to_dict()
    assert "totalCacheWrites" not in data
    assert "totalCacheReads" not in data
    assert data["requestsByProvider"] == {"p": 1}
    assert data["performanceHistory"][0]["modelId"] is None

    data = get_api_metrics([_req(1, cacheWrites=3)]).to_dict()
    assert data["totalCacheWrites"] == 3


def test_combined_tokens():
    assert combined_tokens(_req(1, tokensIn=1, tokensOut=2, cacheWrites=3, cacheReads=4)) == 10
    assert combined_tokens(_raw(1, "nope")) == 0
    assert combined_tokens(_raw(1, None)) == 0


def test_comparison_rows():
    m = get_api_metrics([
        _req(1, tokensIn=10, tokensOut=100, cost=0.01, duration=1000, provider="a", modelId="x"),
        _req(2, tokensIn=20, tokensOut=300, cost=0.02, duration=1000, provider="a", modelId="y"),
        _req(3, tokensIn=5, tokensOut=5, cost=0.5, duration=0, provider="a", modelId="x"),
        _req(4, tokensIn=1, tokensOut=50, duration=500, provider="b", modelId="x"),
    ])
    providers = provider_rows(m)
    assert [r.key for r in providers] == ["a", "b"]
    a = providers[0]
    assert a.request_count == 2
    assert a.total_duration == 2000
    assert a.total_tokens_in == 30
    assert a.total_tokens_out == 400
    assert round(a.total_cost, 6) == 0.03
    assert a.average_duration == 1000
    assert a.tokens_per_second == 200

    models = model_rows(m)
    assert [r.key for r in models] == ["x", "y"]
    assert models[0].request_count == 2
    assert models[0].total_tokens_out == 150
    assert models[0].tokens_per_second == 100
