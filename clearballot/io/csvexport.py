"""Export election data to CSV files.

The export writes three independent files named after a common base:
``<base>_candidates.csv``, ``<base>_voters.csv`` and ``<base>_parties.csv``.
They are meant for spreadsheets and other tools and are never read back;
use :mod:`clearballot.io.datafile` to save and restore an election.

Candidates and voters of all regions are exported together with the flat
ballot; the ``Region`` column holds the region code (empty on the flat
ballot). Vote percentages are computed within the ballot of the candidate.
"""

import csv
import logging
from typing import Any, Dict, Iterable, List

import clearballot.io.core
import clearballot.report

logger = logging.getLogger(__name__)

CANDIDATE_HEADER: List[str] = [
    'Index', 'Name', 'Party', 'Votes', 'VotePercentage', 'Region'
]
VOTER_HEADER: List[str] = [
    'UniqueId', 'FirstName', 'LastName', 'Age', 'Phone', 'Address',
    'HasVoted', 'Region',
]
PARTY_HEADER: List[str] = ['PartyName', 'MemberCount', 'Members']


def candidate_rows(election: Any) -> Iterable[List[Any]]:
    ballots = [(election.candidates, '')] + [
        (region.candidates, region.code) for region in election.regions
    ]
    for candidates, region_code in ballots:
        total = clearballot.report.total_votes(candidates)
        for i, cand in enumerate(candidates):
            percentage = clearballot.report.vote_percentage(
                cand.vote_count, total
            )
            yield [
                i,
                cand.name,
                cand.party_name,
                cand.vote_count,
                clearballot.report.format_percentage(percentage, 2),
                region_code,
            ]


def voter_rows(election: Any) -> Iterable[List[Any]]:
    for voter in election.all_voters():
        yield [
            voter.unique_id,
            voter.first_name,
            voter.last_name,
            voter.age,
            voter.phone_number,
            voter.address,
            'Yes' if voter.has_voted else 'No',
            voter.region_code or '',
        ]


def party_rows(election: Any) -> Iterable[List[Any]]:
    for party in election.parties:
        yield [party.name, len(party.members), ';'.join(party.members)]


def export_paths(base_name: str) -> Dict[str, str]:
    return {
        kind: f'{base_name}_{kind}.csv'
        for kind in ('candidates', 'voters', 'parties')
    }


def export(election: Any, base_name: str) -> Dict[str, str]:
    """Write the three CSV files for the election.

    Text fields of voters and parties (including addresses and member
    lists) are always quoted.

    :param election: An :class:`~clearballot.election.Election`.
    :param base_name: Path prefix of the files.
    :returns: Paths of the written files by kind.
    :raises FileOpenFailed: If any of the files cannot be opened.
    """
    paths = export_paths(base_name)
    _write(paths['candidates'], CANDIDATE_HEADER, candidate_rows(election),
           csv.QUOTE_MINIMAL)
    _write(paths['voters'], VOTER_HEADER, voter_rows(election),
           csv.QUOTE_NONNUMERIC)
    _write(paths['parties'], PARTY_HEADER, party_rows(election),
           csv.QUOTE_NONNUMERIC)
    return paths


def _write(path: str,
           header: List[str],
           rows: Iterable[List[Any]],
           quoting: int,
           ) -> None:
    with clearballot.io.core.open_file(path, 'w', newline='') as outfile:
        writer = csv.writer(outfile, quoting=quoting)
        writer.writerow(header)
        writer.writerows(rows)
    logger.info('exported %s', path)
