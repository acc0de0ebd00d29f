'''Regions (constituencies) of an election.

A region holds its own ballot of candidates and its own roll of voters. It
enforces the rules that can be decided locally: no two candidates of the
same name and no two candidates of the same party in one region, and no
voter registered twice. Uniqueness of candidate names across regions is the
responsibility of the election.
'''

import logging
from typing import List, Optional, Set

from clearballot.candidate import Candidate, Party
from clearballot.errors import DuplicateCandidateInRegion, \
    DuplicateVoterInRegion, PartyAlreadyRepresented
from clearballot.voter import Voter

logger = logging.getLogger(__name__)


class Region:
    '''A geographic or administrative subdivision of the election.

    The position of a candidate in :attr:`candidates` is the index voters of
    this region use to vote for them.

    :param name: Name of the region.
    :param code: Short code of the region, unique within the election.
    '''
    def __init__(self, name: str, code: str):
        self.name = name
        self.code = code
        self.candidates: List[Candidate] = []
        self.voters: List[Voter] = []
        self.parties: List[Party] = []
        self._voter_ids: Set[int] = set()

    def check_candidate(self, candidate: Candidate) -> None:
        '''Check that the candidate can be put on the ballot of this region.

        :raises DuplicateCandidateInRegion: If a candidate of the same name
            is already standing in the region.
        :raises PartyAlreadyRepresented: If the candidate's party already
            has a candidate in the region.
        '''
        if self.is_candidate_in_region(candidate):
            raise DuplicateCandidateInRegion(candidate.name, self.code)
        if not candidate.is_independent \
                and self.has_party_candidate(candidate.party):
            raise PartyAlreadyRepresented(
                candidate.name, self.code, candidate.party.name
            )

    def add_candidate(self, candidate: Candidate) -> None:
        '''Put the candidate on the ballot of this region.

        :raises CandidateError: If :meth:`check_candidate` fails.
        '''
        self.check_candidate(candidate)
        self.candidates.append(candidate)
        if not candidate.is_independent:
            self.register_party(candidate.party)
        logger.info('candidate %s registered in region %s',
                    candidate.name, self.code)

    def has_party_candidate(self, party: Optional[Party]) -> bool:
        if party is None:
            return False
        return any(
            cand.party is not None and cand.party.name == party.name
            for cand in self.candidates
        )

    def is_candidate_in_region(self, candidate: Candidate) -> bool:
        return any(cand.name == candidate.name for cand in self.candidates)

    def add_voter(self, voter: Voter) -> None:
        '''Put the voter on the roll of this region.

        :raises DuplicateVoterInRegion: If a voter with the same ID is
            already on the roll.
        '''
        if self.has_voter(voter.unique_id):
            raise DuplicateVoterInRegion(voter.unique_id, self.code)
        self.voters.append(voter)
        self._voter_ids.add(voter.unique_id)
        logger.info('voter %s assigned to region %s',
                    voter.full_name, self.code)

    def has_voter(self, voter_id: int) -> bool:
        return voter_id in self._voter_ids

    def can_voter_vote_in_region(self, voter_id: int) -> bool:
        return self.has_voter(voter_id)

    def find_voter(self, voter_id: int) -> Optional[Voter]:
        if not self.has_voter(voter_id):
            return None
        for voter in self.voters:
            if voter.unique_id == voter_id:
                return voter
        return None

    def register_party(self, party: Party) -> None:
        if not self.has_party(party):
            self.parties.append(party)

    def has_party(self, party: Optional[Party]) -> bool:
        if party is None:
            return False
        return any(present.name == party.name for present in self.parties)

    @property
    def total_votes(self) -> int:
        return sum(cand.vote_count for cand in self.candidates)

    def __repr__(self) -> str:
        return f'<Region({self.name},{self.code})>'
