'''Candidates and the parties they stand for.

A :class:`Party` is only a named affiliation with a roster of its candidates'
names; it is owned by the :class:`~clearballot.election.Election` that created
it. A :class:`Candidate` refers to its party by object reference and to its
region by the region code, which is stable for the lifetime of the election.
'''

from __future__ import annotations

from typing import List, Optional


INDEPENDENT_LABEL: str = 'Independent'


class Party:
    '''A political party standing in the election.

    Party names are not unique by construction; two parties of the same name
    are two distinct objects. Name comparisons (e.g. when checking party
    representation in a region) are case-sensitive.

    :param name: Name of the party. Cannot be changed afterwards.
    :param members: Names of candidates standing for the party, in the order
        of their registration.
    '''
    def __init__(self, name: str, members: Optional[List[str]] = None):
        self._name = name
        self.members = list(members) if members else []

    @property
    def name(self) -> str:
        return self._name

    def add_member(self, member_name: str) -> None:
        self.members.append(member_name)

    def __repr__(self) -> str:
        return f'<Party({self.name})>'


class Candidate:
    '''A person standing in the election.

    The vote count can only grow, one vote at a time, through
    :meth:`receive_vote`.

    :param name: Name of the candidate. Together with the region, this is
        the identity of the candidate.
    :param party: A party the candidate stands for. If None, the candidate
        is an independent.
    :param region_code: Code of the region the candidate stands in; None
        for candidates on the flat (non-regional) ballot.
    '''
    def __init__(self,
                 name: str,
                 party: Optional[Party] = None,
                 region_code: Optional[str] = None,
                 ):
        self.name = name
        self.party = party
        self.region_code = region_code
        self._votes = 0

    @property
    def vote_count(self) -> int:
        return self._votes

    @property
    def is_independent(self) -> bool:
        return self.party is None

    @property
    def party_name(self) -> str:
        '''Name of the party, or ``Independent`` for independents.'''
        return INDEPENDENT_LABEL if self.party is None else self.party.name

    @property
    def label(self) -> str:
        '''Name with the party (or independence) in parentheses.'''
        return f'{self.name} ({self.party_name})'

    def receive_vote(self) -> None:
        self._votes += 1

    def is_in_region(self, region_code: Optional[str]) -> bool:
        return region_code is not None and self.region_code == region_code

    def __repr__(self) -> str:
        return (
            f'<Candidate({self.name}'
            + (f',{self.party.name}' if self.party is not None else '')
            + (f'@{self.region_code}' if self.region_code is not None else '')
            + ')>'
        )
