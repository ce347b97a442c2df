from rwhsim.components import longest_drought


def test_all_dry_series_is_one_drought():
    assert longest_drought([0.0] * 30) == 30

def test_all_wet_series_has_no_drought():
    assert longest_drought([0.1, 3.0, 12.0, 0.4]) == 0

def test_longest_run_is_kept():
    assert longest_drought([0, 0, 1.2, 0, 0, 0, 0, 5.0, 0]) == 4

def test_trace_rainfall_breaks_drought():
    assert longest_drought([0, 0, 0, 0.01, 0, 0]) == 3

def test_empty_series():
    assert longest_drought([]) == 0
