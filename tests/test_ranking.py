from recentfiles.core.discovery.walker import CandidateFile
from recentfiles.core.ranking import SearchResult, rank_candidates


def _candidates(*pairs):
    return [CandidateFile(path=p, mod_time=t) for p, t in pairs]


def test_sorts_newest_first():
    result = rank_candidates(_candidates(("old", 1.0), ("newest", 3.0), ("mid", 2.0)), limit=0)
    assert result.paths == ("newest", "mid", "old")
    assert result.truncated is False


def test_ties_keep_discovery_order():
    result = rank_candidates(_candidates(("first", 5.0), ("second", 5.0), ("third", 5.0), ("newer", 6.0)), limit=0)
    assert result.paths == ("newer", "first", "second", "third")


def test_limit_truncates_and_flags():
    result = rank_candidates(_candidates(("a", 1.0), ("b", 2.0), ("c", 3.0)), limit=2)
    assert result.paths == ("c", "b")
    assert result.truncated is True


def test_limit_equal_to_count_is_not_truncated():
    result = rank_candidates(_candidates(("a", 1.0), ("b", 2.0)), limit=2)
    assert len(result) == 2
    assert result.truncated is False


def test_non_positive_limit_is_unlimited():
    candidates = _candidates(*[(f"f{i}", float(i)) for i in range(50)])
    for limit in (0, -1):
        result = rank_candidates(candidates, limit=limit)
        assert len(result) == 50
        assert result.truncated is False


def test_result_is_monotonic_in_mod_time():
    candidates = _candidates(*[(f"f{i}", float((i * 7) % 11)) for i in range(30)])
    result = rank_candidates(candidates, limit=10)
    times = [f.mod_time for f in result.files]
    assert all(earlier >= later for earlier, later in zip(times, times[1:]))


def test_empty_input():
    result = rank_candidates([], limit=5)
    assert result == SearchResult(files=(), truncated=False)
    assert result.paths == ()
