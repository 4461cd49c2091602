from datetime import datetime, timedelta, timezone

from blogcore.core.database import UTCTimestamp


def test_timestamps_are_bound_as_utc():
    column = UTCTimestamp()
    paris = timezone(timedelta(hours=1))

    assert column.process_bind_param(datetime(2024, 1, 1, 10, 0, tzinfo=paris), None) == datetime(
        2024, 1, 1, 9, 0, tzinfo=timezone.utc
    )
    assert column.process_bind_param(datetime(2024, 1, 1, 10, 0), None) == datetime(
        2024, 1, 1, 10, 0, tzinfo=timezone.utc
    )
    assert column.process_bind_param(None, None) is None


def test_naive_results_are_read_as_utc():
    column = UTCTimestamp()

    loaded = column.process_result_value(datetime(2024, 1, 1, 10, 0), None)
    assert loaded == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert loaded.tzinfo is timezone.utc
    assert column.process_result_value(None, None) is None
