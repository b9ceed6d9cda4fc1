"""Tests for TraceCorrelator."""

import re

from relay.tracing import DEFAULT_SESSION_KEY, generate_trace_id


class TestTraceIds:
    """Tests for trace id generation."""

    def test_trace_id_format(self):
        """Test the tr_<time>_<random> shape."""
        assert re.fullmatch(r"tr_[0-9a-z]+_[0-9a-z]{7}", generate_trace_id())

    def test_trace_ids_unique(self):
        """Test that generated ids do not collide."""
        ids = {generate_trace_id() for _ in range(1000)}
        assert len(ids) == 1000


class TestTraceCorrelator:
    """Tests for open/close semantics."""

    def test_open_is_stable_until_closed(self, correlator):
        """Test that repeated opens return the same trace id."""
        first = correlator.open("s1")
        assert correlator.open("s1") == first
        assert correlator.current("s1") == first

    def test_close_then_open_gives_new_trace(self, correlator):
        """Test that a closed turn is followed by a different trace id."""
        first = correlator.open("s1")
        correlator.close("s1")
        assert correlator.current("s1") is None
        assert correlator.open("s1") != first

    def test_close_is_idempotent(self, correlator):
        """Test closing a key with no open trace."""
        correlator.close("missing")
        correlator.close("missing")
        assert correlator.current("missing") is None

    def test_sessions_are_independent(self, correlator):
        """Test that each session key has its own trace."""
        a = correlator.open("a")
        b = correlator.open("b")
        assert a != b
        correlator.close("a")
        assert correlator.current("b") == b

    def test_missing_key_uses_default(self, correlator, context):
        """Test that None and empty keys share the default session."""
        trace_id = correlator.open(None)
        assert correlator.open("") == trace_id
        assert context.open_traces == {DEFAULT_SESSION_KEY: trace_id}
