'''Vote tallies and plain-text reports.

The tally functions are pure: they read vote counts and never modify them,
so computing a report twice without an intervening vote gives the same
result. The ``*_lines`` generators produce report lines without trailing
newlines; the :class:`~clearballot.election.Election` display methods print
them.
'''

import dataclasses
import operator
from typing import Iterable, List, Sequence

from clearballot.candidate import Candidate, Party
from clearballot.voter import Voter


@dataclasses.dataclass
class ResultRow:
    '''One line of election results.'''
    rank: int
    candidate: Candidate
    votes: int
    percentage: float

    @property
    def label(self) -> str:
        return self.candidate.label


def total_votes(candidates: Iterable[Candidate]) -> int:
    return sum(cand.vote_count for cand in candidates)


def vote_percentage(votes: int, total: int) -> float:
    '''Return the share of votes in percent; 0.0 if no votes were cast.'''
    if total == 0:
        return 0.0
    return votes / total * 100


def format_percentage(percentage: float, decimals: int = 1) -> str:
    return f'{percentage:.{decimals}f}'


def tally(candidates: Sequence[Candidate]) -> List[ResultRow]:
    '''Rank candidates by the number of votes received.

    The ranking is descending by votes. The sort is stable, so candidates
    with equal votes keep their registration order.

    :param candidates: Candidates on a single ballot (the flat ballot or the
        ballot of one region).
    '''
    total = total_votes(candidates)
    ranked = sorted(
        candidates,
        key=operator.attrgetter('vote_count'),
        reverse=True,
    )
    return [
        ResultRow(
            rank=i,
            candidate=cand,
            votes=cand.vote_count,
            percentage=vote_percentage(cand.vote_count, total),
        )
        for i, cand in enumerate(ranked, start=1)
    ]


def result_lines(title: str,
                 candidates: Sequence[Candidate],
                 n_voters: int,
                 scope: str = '',
                 ) -> Iterable[str]:
    '''Generate the console listing of election results.

    :param title: Heading of the listing.
    :param candidates: Candidates on the ballot.
    :param n_voters: Number of voters registered for the ballot.
    :param scope: Suffix of the total lines, e.g. ``' in region'``.
    '''
    yield ''
    yield f'=== {title} ==='
    if not candidates:
        yield 'No candidates' + (scope or ' in this election') + '.'
        return
    yield f'Total votes cast{scope}: {total_votes(candidates)}'
    yield f'Total registered voters{scope}: {n_voters}'
    yield ''
    for row in tally(candidates):
        yield (
            f'{row.rank}. {row.label} - {row.votes} votes'
            f' ({format_percentage(row.percentage)}%)'
        )


def candidate_lines(candidates: Sequence[Candidate],
                    title: str = 'Candidates',
                    ) -> Iterable[str]:
    if not candidates:
        yield 'No candidates registered.'
        return
    yield ''
    yield f'=== {title} ==='
    for i, cand in enumerate(candidates):
        yield f'{i}. {cand.label} - Votes: {cand.vote_count}'


def voter_lines(voters: Sequence[Voter],
                title: str = 'Registered Voters',
                ) -> Iterable[str]:
    if not voters:
        yield 'No voters registered.'
        return
    yield ''
    yield f'=== {title} ==='
    for voter in voters:
        yield (
            f'ID: {voter.unique_id} | {voter.full_name} | Age: {voter.age}'
            f' | Voted: {"Yes" if voter.has_voted else "No"}'
        )


def party_lines(parties: Sequence[Party]) -> Iterable[str]:
    if not parties:
        yield 'No parties registered.'
        return
    yield ''
    yield '=== Registered Parties ==='
    for i, party in enumerate(parties, start=1):
        yield f'{i}. {party.name} (Members: {len(party.members)})'


def region_lines(regions: Sequence) -> Iterable[str]:
    if not regions:
        yield 'No regions created.'
        return
    yield ''
    yield '=== Election Regions ==='
    for i, region in enumerate(regions, start=1):
        yield f'{i}. {region.name} ({region.code})'
        yield (f'   Candidates: {len(region.candidates)},'
               f' Voters: {len(region.voters)}')


def summary_lines(title: str,
                  candidates: Sequence[Candidate],
                  n_voters: int,
                  ) -> Iterable[str]:
    '''Generate the plain-text results summary written to a file.

    Candidates are listed in registration order with their raw vote counts.
    '''
    yield f'Election Results: {title}'
    yield '================================'
    yield ''
    yield f'Total votes cast: {total_votes(candidates)}'
    yield f'Total registered voters: {n_voters}'
    yield ''
    for cand in candidates:
        yield f'{cand.label}: {cand.vote_count} votes'
