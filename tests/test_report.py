
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import clearballot.report
from clearballot.candidate import Candidate, Party


def candidates_with_votes(votes):
    candidates = []
    for i, n_votes in enumerate(votes):
        cand = Candidate(f'C{i}')
        for _ in range(n_votes):
            cand.receive_vote()
        candidates.append(cand)
    return candidates


@pytest.mark.parametrize(('votes', 'expected_order'), [
    ([1, 3, 2], ['C1', 'C2', 'C0']),
    ([2, 2, 5], ['C2', 'C0', 'C1']),
    ([0, 0, 0], ['C0', 'C1', 'C2']),
    ([], []),
])
def test_tally_order(votes, expected_order):
    rows = clearballot.report.tally(candidates_with_votes(votes))
    assert [row.candidate.name for row in rows] == expected_order
    assert [row.rank for row in rows] == list(range(1, len(votes) + 1))


def test_tally_idempotent():
    candidates = candidates_with_votes([4, 1, 4])
    first = clearballot.report.tally(candidates)
    second = clearballot.report.tally(candidates)
    assert first == second
    assert [cand.name for cand in candidates] == ['C0', 'C1', 'C2']
    assert [cand.vote_count for cand in candidates] == [4, 1, 4]


def test_percentages():
    rows = clearballot.report.tally(candidates_with_votes([1, 3]))
    assert rows[0].percentage == 75.0
    assert rows[1].percentage == 25.0
    assert clearballot.report.vote_percentage(5, 0) == 0.0


def test_result_lines():
    candidates = candidates_with_votes([1, 2])
    candidates[0].party = Party('Greens')
    lines = list(clearballot.report.result_lines('Results', candidates, 4))
    assert lines == [
        '',
        '=== Results ===',
        'Total votes cast: 3',
        'Total registered voters: 4',
        '',
        '1. C1 (Independent) - 2 votes (66.7%)',
        '2. C0 (Greens) - 1 votes (33.3%)',
    ]


def test_summary_lines():
    candidates = candidates_with_votes([1, 2])
    lines = list(clearballot.report.summary_lines('Town', candidates, 5))
    assert lines[0] == 'Election Results: Town'
    assert lines[-2:] == [
        'C0 (Independent): 1 votes',
        'C1 (Independent): 2 votes',
    ]
