'''The election aggregate.

An :class:`Election` owns everything in it: its parties, its regions (which
in turn hold regional candidates and voters) and the flat, non-regional
ballot and roll kept for single-region elections. All state changes go
through its methods, which check every rule before changing anything, so a
rejected operation raises an :class:`~clearballot.errors.ElectionError` and
leaves the election as it was.

The regional restrictions are:

1.  A candidate name can be registered in at most one region of the
    election, and only once there.
2.  A party can have at most one candidate in a region (enforced by
    :class:`~clearballot.region.Region`).
3.  A voter can only vote in the region they registered in.

The election assumes sequential access; see :mod:`clearballot.service` for
serialized access from multiple threads.
'''

import logging
import sys
from typing import Dict, Iterable, List, Optional, Set, TextIO

import clearballot.io.core
import clearballot.io.csvexport
import clearballot.io.datafile
import clearballot.report
import clearballot.validate
from clearballot.candidate import Candidate, Party
from clearballot.errors import AlreadyVoted, CandidateAlreadyInAnotherRegion, \
    CandidateError, DuplicateRegionCode, DuplicateVoterId, \
    DuplicateVoterInRegion, ElectionError, FileOpenFailed, \
    InvalidCandidateIndex, InvalidCandidateName, InvalidPartyName, \
    InvalidRegion, ValidationFailed, VoterNotFound, VoterNotInRegion
from clearballot.io.datafile import CandidateRecord, ElectionData, \
    VoterRecord
from clearballot.region import Region
from clearballot.report import ResultRow
from clearballot.voter import Voter

logger = logging.getLogger(__name__)


class Election:
    '''An election with its parties, regions, candidates and voters.

    :param title: Title of the election.
    '''
    def __init__(self, title: str):
        self.title = title
        self.parties: List[Party] = []
        self.regions: List[Region] = []
        self.candidates: List[Candidate] = []
        self.voters: List[Voter] = []
        self._voter_ids: Set[int] = set()
        self._candidate_registry: Dict[str, Set[str]] = {}

    # Regions and parties

    def create_region(self, name: str, code: str) -> Region:
        '''Create a new region.

        :raises InvalidRegion: If the name or code contains a line break.
        :raises DuplicateRegionCode: If a region with the code exists.
        '''
        validate = clearballot.validate
        if validate.has_line_break(name) or validate.has_line_break(code):
            logger.warning('region name %r or code %r invalid', name, code)
            raise InvalidRegion(name, code)
        if self.region_by_code(code) is not None:
            logger.warning('region code %s already used', code)
            raise DuplicateRegionCode(code)
        region = Region(name, code)
        self.regions.append(region)
        logger.info('region %s (%s) created', name, code)
        return region

    def region_by_code(self, code: str) -> Optional[Region]:
        for region in self.regions:
            if region.code == code:
                return region
        return None

    def create_party(self, name: str) -> Party:
        '''Create a new party.

        Always creates a new party, even if one of the same name exists
        already; use :meth:`party_by_name` to look existing parties up.

        :raises InvalidPartyName: If the name contains a line break or is the
            label of independent candidates.
        '''
        if not clearballot.validate.is_valid_party_name(name):
            logger.warning('party name %r invalid', name)
            raise InvalidPartyName(name)
        party = Party(name)
        self.parties.append(party)
        logger.info('party %s created', name)
        return party

    def party_by_name(self, name: str) -> Optional[Party]:
        '''Return the first party of the given name, or None.'''
        for party in self.parties:
            if party.name == name:
                return party
        return None

    # Candidates

    def add_candidate(self,
                      name: str,
                      party: Optional[Party] = None,
                      ) -> Candidate:
        '''Put a candidate on the flat (non-regional) ballot.

        No regional rules are checked. Do not mix this with regional
        candidate registration in one election.

        :raises InvalidCandidateName: If the name contains a line break or
            a ``;``.
        '''
        self.check_candidate_name(name)
        candidate = Candidate(name, party)
        self.candidates.append(candidate)
        if party is not None:
            party.add_member(name)
        logger.info('candidate %s added to the ballot', candidate.label)
        return candidate

    def add_candidate_to_region(self,
                                name: str,
                                region: Region,
                                party: Optional[Party] = None,
                                ) -> Candidate:
        '''Register a candidate in a region.

        The name is reserved for the region permanently, so any further
        registration of the same name fails, in the same region too.

        :param name: Name of the candidate.
        :param region: A region of this election.
        :param party: A party of this election the candidate stands for;
            None for an independent.
        :raises CandidateError: If :meth:`check_candidate_for_region` fails.
        '''
        try:
            self.check_candidate_for_region(name, region, party)
        except CandidateError as err:
            logger.warning('candidate %s rejected: %s', name, err)
            raise
        candidate = Candidate(name, party, region.code)
        region.add_candidate(candidate)
        self._candidate_registry.setdefault(name, set()).add(region.code)
        if party is not None:
            party.add_member(name)
        logger.info('candidate %s added to region %s',
                    candidate.label, region.code)
        return candidate

    def can_candidate_be_added_to_region(self,
                                         name: str,
                                         region: Region,
                                         party: Optional[Party] = None,
                                         ) -> bool:
        '''Check whether :meth:`add_candidate_to_region` would succeed.'''
        try:
            self.check_candidate_for_region(name, region, party)
        except CandidateError:
            return False
        return True

    def check_candidate_for_region(self,
                                   name: str,
                                   region: Region,
                                   party: Optional[Party] = None,
                                   ) -> None:
        '''Raise the error :meth:`add_candidate_to_region` would raise.

        Changes nothing.

        :raises InvalidCandidateName: If the name contains a line break or
            a ``;``.
        :raises CandidateAlreadyInAnotherRegion: If the name is already
            registered in any region.
        :raises DuplicateCandidateInRegion: If the region already has a
            candidate of that name.
        :raises PartyAlreadyRepresented: If the party already has a candidate
            in the region.
        '''
        self.check_candidate_name(name, region.code)
        if name in self._candidate_registry:
            raise CandidateAlreadyInAnotherRegion(
                name, region.code, self._candidate_registry[name]
            )
        region.check_candidate(Candidate(name, party, region.code))

    def check_candidate_name(self,
                             name: str,
                             region_code: Optional[str] = None,
                             ) -> None:
        '''Check that the candidate name can be stored in a data file.

        :raises InvalidCandidateName: If the name contains a line break or
            a ``;``.
        '''
        if not clearballot.validate.is_valid_candidate_name(name):
            logger.warning('candidate name %r invalid', name)
            raise InvalidCandidateName(name, region_code)

    def all_candidates(self) -> List[Candidate]:
        '''Return candidates of the flat ballot and of all regions.'''
        candidates = list(self.candidates)
        for region in self.regions:
            candidates.extend(region.candidates)
        return candidates

    # Voters

    def register_voter(self,
                       first_name: str,
                       last_name: str,
                       phone_number: str,
                       address: str,
                       unique_id: str,
                       age: str,
                       ) -> Voter:
        '''Register a voter on the flat (non-regional) roll.

        The fields are given as raw strings and validated by
        :func:`clearballot.validate.validate_voter_input`; they are stored
        trimmed.

        :raises ValidationFailed: If any field is invalid; lists all errors.
        :raises DuplicateVoterId: If the ID is registered in the election.
        '''
        voter = self._build_voter(
            first_name, last_name, phone_number, address, unique_id, age
        )
        self.voters.append(voter)
        self._voter_ids.add(voter.unique_id)
        logger.info('voter %s registered with ID %d',
                    voter.full_name, voter.unique_id)
        return voter

    def register_voter_in_region(self,
                                 first_name: str,
                                 last_name: str,
                                 phone_number: str,
                                 address: str,
                                 unique_id: str,
                                 age: str,
                                 region: Region,
                                 ) -> Voter:
        '''Register a voter on the roll of a region.

        The voter ID must be unique across the whole election.

        :raises ValidationFailed: If any field is invalid; lists all errors.
        :raises DuplicateVoterId: If the ID is registered in the election.
        :raises DuplicateVoterInRegion: If the ID is registered in the region.
        '''
        voter = self._build_voter(
            first_name, last_name, phone_number, address, unique_id, age,
            region.code
        )
        if region.has_voter(voter.unique_id):
            logger.warning('voter ID %d already in region %s',
                           voter.unique_id, region.code)
            raise DuplicateVoterInRegion(voter.unique_id, region.code)
        region.add_voter(voter)
        self._voter_ids.add(voter.unique_id)
        logger.info('voter %s registered in region %s with ID %d',
                    voter.full_name, region.code, voter.unique_id)
        return voter

    def _build_voter(self,
                     first_name: str,
                     last_name: str,
                     phone_number: str,
                     address: str,
                     unique_id: str,
                     age: str,
                     region_code: Optional[str] = None,
                     ) -> Voter:
        errors = clearballot.validate.validate_voter_input(
            first_name, last_name, phone_number, address, unique_id, age
        )
        if errors:
            logger.warning('voter registration invalid: %s', errors)
            raise ValidationFailed(errors)
        trim = clearballot.validate.trim
        voter_id = int(trim(unique_id))
        if voter_id in self._voter_ids:
            logger.warning('voter ID %d already registered', voter_id)
            raise DuplicateVoterId(voter_id)
        return Voter(
            trim(first_name),
            trim(last_name),
            trim(phone_number),
            trim(address),
            voter_id,
            int(trim(age)),
            region_code,
        )

    def all_voters(self) -> List[Voter]:
        '''Return voters of the flat roll and of all regions.'''
        voters = list(self.voters)
        for region in self.regions:
            voters.extend(region.voters)
        return voters

    def find_voter(self, voter_id: int) -> Optional[Voter]:
        '''Find a voter by ID on the flat roll or in any region.'''
        for voter in self.voters:
            if voter.unique_id == voter_id:
                return voter
        for region in self.regions:
            voter = region.find_voter(voter_id)
            if voter is not None:
                return voter
        return None

    def is_voter_registered(self, voter_id: int) -> bool:
        return voter_id in self._voter_ids

    def has_voter_voted(self, voter_id: int) -> bool:
        voter = self.find_voter(voter_id)
        return voter is not None and voter.has_voted

    def is_voter_in_region(self, voter_id: int, region: Region) -> bool:
        return region.has_voter(voter_id)

    # Voting

    def cast_vote(self, voter_id: int, candidate_index: int) -> Candidate:
        '''Cast a vote of a flat-roll voter for a flat-ballot candidate.

        :param voter_id: ID of a voter on the flat roll.
        :param candidate_index: 0-based position of the candidate on the
            flat ballot.
        :returns: The candidate voted for.
        :raises VoterNotFound: If no voter on the flat roll has the ID.
        :raises AlreadyVoted: If the voter has voted already.
        :raises InvalidCandidateIndex: If the index is out of range.
        '''
        voter = None
        for flat_voter in self.voters:
            if flat_voter.unique_id == voter_id:
                voter = flat_voter
                break
        if voter is None:
            logger.warning('vote rejected: voter ID %d not registered',
                           voter_id)
            raise VoterNotFound(voter_id)
        return self._record_vote(voter, self.candidates, candidate_index)

    def cast_vote_in_region(self,
                            voter_id: int,
                            candidate_index: int,
                            region: Region,
                            ) -> Candidate:
        '''Cast a vote of a regional voter for a candidate of their region.

        :param voter_id: ID of a voter registered in the region.
        :param candidate_index: 0-based position of the candidate on the
            ballot of the region.
        :param region: The region to vote in.
        :returns: The candidate voted for.
        :raises VoterNotInRegion: If the voter is not registered in the
            region, even if they are registered elsewhere.
        :raises AlreadyVoted: If the voter has voted already.
        :raises InvalidCandidateIndex: If the index is out of range for the
            ballot of the region.
        '''
        voter = region.find_voter(voter_id)
        if voter is None:
            logger.warning('vote rejected: voter ID %d not in region %s',
                           voter_id, region.code)
            raise VoterNotInRegion(voter_id, region.code)
        return self._record_vote(voter, region.candidates, candidate_index)

    def _record_vote(self,
                     voter: Voter,
                     candidates: List[Candidate],
                     candidate_index: int,
                     ) -> Candidate:
        if voter.has_voted:
            logger.warning('vote rejected: voter ID %d has already voted',
                           voter.unique_id)
            raise AlreadyVoted(voter.unique_id)
        if not 0 <= candidate_index < len(candidates):
            logger.warning('vote rejected: invalid candidate index %d',
                           candidate_index)
            raise InvalidCandidateIndex(candidate_index, len(candidates))
        candidate = candidates[candidate_index]
        candidate.receive_vote()
        voter.mark_as_voted()
        logger.info('vote cast by voter ID %d', voter.unique_id)
        return candidate

    # Results and listings

    def results(self, region: Optional[Region] = None) -> List[ResultRow]:
        '''Return the ranked results of the flat ballot or of a region.'''
        if region is None:
            return clearballot.report.tally(self.candidates)
        else:
            return clearballot.report.tally(region.candidates)

    def total_votes(self) -> int:
        '''Return the number of votes cast in the whole election.'''
        return clearballot.report.total_votes(self.all_candidates())

    def turnout(self) -> float:
        '''Return votes cast per registered voter in percent.'''
        return clearballot.report.vote_percentage(
            self.total_votes(), len(self.all_voters())
        )

    def display_results(self, file: Optional[TextIO] = None) -> None:
        _print_lines(clearballot.report.result_lines(
            f'Election Results: {self.title}',
            self.candidates,
            len(self.voters),
        ), file)

    def display_results_in_region(self,
                                  region: Region,
                                  file: Optional[TextIO] = None,
                                  ) -> None:
        _print_lines(clearballot.report.result_lines(
            f'Election Results for Region: {region.name}',
            region.candidates,
            len(region.voters),
            scope=' in region',
        ), file)

    def display_candidates(self, file: Optional[TextIO] = None) -> None:
        _print_lines(clearballot.report.candidate_lines(self.candidates), file)

    def display_candidates_in_region(self,
                                     region: Region,
                                     file: Optional[TextIO] = None,
                                     ) -> None:
        _print_lines(clearballot.report.candidate_lines(
            region.candidates, f'Candidates in {region.name}'
        ), file)

    def display_voters(self, file: Optional[TextIO] = None) -> None:
        _print_lines(clearballot.report.voter_lines(self.voters), file)

    def display_voters_in_region(self,
                                 region: Region,
                                 file: Optional[TextIO] = None,
                                 ) -> None:
        _print_lines(clearballot.report.voter_lines(
            region.voters, f'Voters in {region.name}'
        ), file)

    def display_parties(self, file: Optional[TextIO] = None) -> None:
        _print_lines(clearballot.report.party_lines(self.parties), file)

    def display_regions(self, file: Optional[TextIO] = None) -> None:
        _print_lines(clearballot.report.region_lines(self.regions), file)

    # Persistence

    def save_results_to_file(self, path: str) -> None:
        '''Write a plain-text summary of the flat ballot results.

        :raises FileOpenFailed: If the file cannot be opened.
        '''
        with clearballot.io.core.open_file(path, 'w') as outfile:
            for line in clearballot.report.summary_lines(
                self.title, self.candidates, len(self.voters)
            ):
                outfile.write(line + '\n')
        logger.info('results saved to %s', path)

    def save_complete_election_data(self, path: str) -> None:
        '''Save the complete state of the election to a data file.

        :raises FileOpenFailed: If the file cannot be opened.
        '''
        with clearballot.io.core.open_file(path, 'w') as outfile:
            clearballot.io.datafile.dump(outfile, self)
        logger.info('complete election data saved to %s', path)

    def load_complete_election_data(self, path: str) -> bool:
        '''Replace the state of the election by the contents of a data file.

        Parties, candidates, voters, regions and all registries are replaced.
        Anything in the file that cannot be understood, or that would break
        a rule of the election, is skipped.

        :returns: False if the file could not be opened (the election is
            left untouched), True otherwise.
        '''
        try:
            with clearballot.io.core.open_file(path) as infile:
                data = clearballot.io.datafile.load(infile)
        except FileOpenFailed as err:
            logger.warning('%s', err)
            return False
        self._restore(data)
        logger.info(
            'election data loaded from %s: %d parties, %d candidates,'
            ' %d voters, %d regions', path, len(self.parties),
            len(self.candidates), len(self.voters), len(self.regions)
        )
        return True

    def _restore(self, data: ElectionData) -> None:
        if data.title is not None:
            self.title = data.title
        self.parties = [
            Party(record.name, record.members) for record in data.parties
        ]
        self.regions = []
        self.candidates = []
        self.voters = []
        self._voter_ids = set()
        self._candidate_registry = {}
        for record in data.candidates:
            self.candidates.append(self._restore_candidate(record))
        for record in data.voters:
            if record.unique_id in self._voter_ids:
                logger.warning('skipping duplicate voter ID %d',
                               record.unique_id)
                continue
            self.voters.append(self._restore_voter(record))
            self._voter_ids.add(record.unique_id)
        for region_record in data.regions:
            if self.region_by_code(region_record.code) is not None:
                logger.warning('skipping duplicate region %s',
                               region_record.code)
                continue
            region = Region(region_record.name, region_record.code)
            self.regions.append(region)
            for record in region_record.candidates:
                self._restore_regional_candidate(record, region)
            for record in region_record.voters:
                if record.unique_id in self._voter_ids:
                    logger.warning('skipping duplicate voter ID %d',
                                   record.unique_id)
                    continue
                region.add_voter(self._restore_voter(record, region.code))
                self._voter_ids.add(record.unique_id)

    def _restore_candidate(self,
                           record: CandidateRecord,
                           region_code: Optional[str] = None,
                           ) -> Candidate:
        party = None
        if record.party is not None:
            party = self.party_by_name(record.party)
            if party is None:
                logger.warning('unknown party %s of candidate %s,'
                               ' restoring as independent',
                               record.party, record.name)
        candidate = Candidate(record.name, party, region_code)
        for _ in range(record.votes):
            candidate.receive_vote()
        return candidate

    def _restore_regional_candidate(self,
                                    record: CandidateRecord,
                                    region: Region,
                                    ) -> None:
        if record.name in self._candidate_registry:
            logger.warning('skipping candidate %s already registered in %s',
                           record.name,
                           sorted(self._candidate_registry[record.name]))
            return
        try:
            region.add_candidate(self._restore_candidate(record, region.code))
        except ElectionError as err:
            logger.warning('skipping candidate %s: %s', record.name, err)
            return
        self._candidate_registry.setdefault(record.name, set()).add(
            region.code
        )

    def _restore_voter(self,
                       record: VoterRecord,
                       region_code: Optional[str] = None,
                       ) -> Voter:
        voter = Voter(
            record.first_name,
            record.last_name,
            record.phone_number,
            record.address,
            record.unique_id,
            record.age,
            region_code,
        )
        if record.has_voted:
            voter.mark_as_voted()
        return voter

    def export_to_csv(self, base_name: str) -> Dict[str, str]:
        '''Export candidates, voters and parties to three CSV files.

        :param base_name: Path prefix of the files.
        :returns: Paths of the written files by kind.
        :raises FileOpenFailed: If any of the files cannot be opened.
        '''
        return clearballot.io.csvexport.export(self, base_name)

    def __repr__(self) -> str:
        return f'<Election({self.title})>'


def _print_lines(lines: Iterable[str], file: Optional[TextIO] = None) -> None:
    if file is None:
        file = sys.stdout
    for line in lines:
        print(line, file=file)
