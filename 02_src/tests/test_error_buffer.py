"""Tests for ErrorBuffer."""

from relay.health import ErrorBuffer


class TestErrorBuffer:
    """Tests for the bounded failure ring."""

    def test_record_returns_timestamped_record(self):
        """Test that record() stamps time and keeps tool and message."""
        buffer = ErrorBuffer()

        record = buffer.record("shell", "exit 1")

        assert record.tool == "shell"
        assert record.message == "exit 1"
        assert record.time.tzinfo is not None
        assert buffer.recent() == [record]

    def test_keeps_most_recent_ten(self):
        """Test that 15 failures leave the last 10 in order and count 15."""
        buffer = ErrorBuffer()

        for i in range(15):
            buffer.record("tool", f"error {i}")

        assert [r.message for r in buffer.recent()] == [f"error {i}" for i in range(5, 15)]
        assert buffer.count == 15

    def test_custom_capacity(self):
        """Test a deployment-specific capacity."""
        buffer = ErrorBuffer(capacity=3)
        for i in range(5):
            buffer.record(None, str(i))

        assert buffer.capacity == 3
        assert [r.message for r in buffer.recent()] == ["2", "3", "4"]

    def test_reset(self):
        """Test that reset clears records and the counter."""
        buffer = ErrorBuffer()
        buffer.record("t", "m")

        buffer.reset()

        assert buffer.recent() == []
        assert buffer.count == 0

    def test_record_to_dict(self):
        """Test the wire shape of a record."""
        record = ErrorBuffer().record(None, "boom")
        assert record.to_dict() == {
            "time": record.time.isoformat(),
            "message": "boom",
            "tool": None,
        }
