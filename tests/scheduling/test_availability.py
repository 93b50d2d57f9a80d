from datetime import date, timedelta

from mkorplan.fleet import Job
from mkorplan.scheduling import find_conflict, is_available

DAY0 = date(2024, 1, 1)
TEN = (10,)


def day(n: int) -> date:
    return DAY0 + timedelta(days=n - 1)


def test_empty_job_set_is_always_available():
    assert is_available([], day(1), TEN)


def test_overlap_is_unavailable_and_adjacent_is_available():
    existing = [Job(start=day(10), durations=TEN)]  # days 10-19
    assert not is_available(existing, day(15), TEN)  # 15-24
    assert is_available(existing, day(20), TEN)  # 20-29
    assert is_available(existing, day(1), (9,))  # 1-9 ends right before day 10


def test_candidate_touching_first_day_overlaps():
    existing = [Job(start=day(10), durations=TEN)]
    assert not is_available(existing, day(1), TEN)  # 1-10 shares day 10


def test_job_never_available_against_itself():
    job = Job(start=day(5), durations=(2, 1, 5, 1, 2, 3))
    assert not is_available([job], job.start, job.durations)


def test_existing_range_uses_candidate_total():
    # Recorded with a 2-day plan, but measured with the candidate's 10 days: 10-19.
    existing = [Job(start=day(10), durations=(2,))]
    assert not is_available(existing, day(15), TEN)


def test_find_conflict_names_first_offending_job():
    first = Job(start=day(1), durations=TEN)
    second = Job(start=day(30), durations=TEN)
    hit = find_conflict([first, second], day(35), TEN)
    assert hit is not None
    job, occupied = hit
    assert job == second
    assert occupied == (day(30), day(39))
    assert find_conflict([first, second], day(40), TEN) is None


def test_zero_length_candidate_never_conflicts():
    existing = [Job(start=day(10), durations=TEN)]
    assert is_available(existing, day(12), (0, 0))
