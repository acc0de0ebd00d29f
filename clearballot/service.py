'''Access to multiple elections through a request/response interface.

:class:`ElectionRegistry` owns a set of elections keyed by sequential
integer IDs and serializes all access to them through one lock.
:class:`ElectionService` wraps every election operation so that it returns
a :class:`ServiceResponse` instead of raising: failures of the election
become responses with ``success`` set to False and the error text as the
message.
'''

import dataclasses
import logging
import os
import threading
from typing import Callable, Dict, List, Optional

from clearballot.election import Election
from clearballot.errors import ElectionError, ValidationFailed
from clearballot.region import Region

logger = logging.getLogger(__name__)

SHUTDOWN_FILE_PATTERN: str = 'election_{}_shutdown.txt'
SHARED_DATA_FILE: str = 'shared_election_data.txt'
ELECTION_NOT_FOUND: str = 'Election not found.'
REGION_NOT_FOUND: str = 'Region not found.'

DEFAULT_ELECTION_TITLE: str = '2024 Local Elections'
DEFAULT_PARTY_CANDIDATES: Dict[str, str] = {
    'Alice Johnson': 'Democratic Party',
    'Bob Smith': 'Republican Party',
    'Carol Green': 'Green Party',
}
DEFAULT_INDEPENDENT_CANDIDATES: List[str] = ['David Independent']


@dataclasses.dataclass
class ServiceResponse:
    '''Outcome of a service operation.

    :param success: Whether the operation was carried out.
    :param message: Human-readable description of the outcome.
    :param data: Additional lines of output, if the operation has any.
    '''
    success: bool
    message: str = ''
    data: List[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class VoterRegistration:
    '''Raw voter registration fields as entered by the user.'''
    first_name: str
    last_name: str
    phone_number: str
    address: str
    unique_id: str
    age: str

    def as_args(self) -> List[str]:
        return [
            self.first_name, self.last_name, self.phone_number,
            self.address, self.unique_id, self.age,
        ]


class ElectionRegistry:
    '''A thread-safe collection of elections with sequential IDs.

    :param data_dir: Directory to save the elections to on :meth:`stop`.
    '''
    def __init__(self, data_dir: str = '.'):
        self.data_dir = data_dir
        self._elections: Dict[int, Election] = {}
        self._next_id = 1
        self._running = False
        self.lock = threading.RLock()

    def start(self) -> None:
        with self.lock:
            if self._running:
                logger.info('election registry already running')
                return
            self._running = True
            logger.info('election registry started')

    def stop(self) -> List[str]:
        '''Stop the registry, saving all its elections.

        Every election is saved to its own shutdown file; the election with
        the lowest ID is also saved to the shared data file, so that it can
        be picked up by other tools.

        :returns: Paths of the files written.
        :raises FileOpenFailed: If any of the files cannot be opened.
        '''
        with self.lock:
            if not self._running:
                logger.info('election registry not running')
                return []
            paths = []
            for election_id in sorted(self._elections):
                path = self._path(SHUTDOWN_FILE_PATTERN.format(election_id))
                self._elections[election_id].save_complete_election_data(path)
                logger.info('election %d saved to %s', election_id, path)
                paths.append(path)
            if self._elections:
                path = self._path(SHARED_DATA_FILE)
                self._elections[min(self._elections)] \
                    .save_complete_election_data(path)
                paths.append(path)
            self._running = False
            logger.info('election registry stopped')
            return paths

    def is_running(self) -> bool:
        with self.lock:
            return self._running

    def create_election(self, title: str) -> int:
        '''Create a new election and return its ID.'''
        with self.lock:
            election_id = self._next_id
            self._next_id += 1
            self._elections[election_id] = Election(title)
            logger.info('election %d created: %s', election_id, title)
            return election_id

    def election_exists(self, election_id: int) -> bool:
        with self.lock:
            return election_id in self._elections

    def get_election(self, election_id: int) -> Optional[Election]:
        with self.lock:
            return self._elections.get(election_id)

    def election_ids(self) -> List[int]:
        with self.lock:
            return sorted(self._elections)

    def _path(self, filename: str) -> str:
        return os.path.join(self.data_dir, filename)


class ElectionService:
    '''Request/response facade over an election registry.

    Each method takes the ID of the election to operate on and returns
    a :class:`ServiceResponse`. The election is locked for the duration of
    the operation.

    :param registry: Registry of the elections; a new one in the current
        directory is created if not given.
    '''
    def __init__(self, registry: Optional[ElectionRegistry] = None):
        self.registry = registry if registry is not None \
            else ElectionRegistry()

    def create_election(self, title: str) -> ServiceResponse:
        election_id = self.registry.create_election(title)
        return ServiceResponse(
            True, f"Election '{title}' created.", [str(election_id)]
        )

    def create_default_election(self) -> int:
        '''Create the demonstration election with its parties and candidates.

        :returns: ID of the new election.
        '''
        election_id = self.registry.create_election(DEFAULT_ELECTION_TITLE)
        for name, party_name in DEFAULT_PARTY_CANDIDATES.items():
            self.create_party(election_id, party_name)
            self.add_candidate_with_party(election_id, name, party_name)
        for name in DEFAULT_INDEPENDENT_CANDIDATES:
            self.add_candidate(election_id, name)
        return election_id

    # Voter operations

    def register_voter(self,
                       election_id: int,
                       registration: VoterRegistration,
                       ) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: election.register_voter(*registration.as_args()),
            'Voter registered successfully.',
        )

    def register_voter_in_region(self,
                                 election_id: int,
                                 registration: VoterRegistration,
                                 region_code: str,
                                 ) -> ServiceResponse:
        return self._run_in_region(
            election_id, region_code,
            lambda election, region: election.register_voter_in_region(
                *registration.as_args(), region
            ),
            f'Voter registered successfully in region {region_code}.',
        )

    def cast_vote(self,
                  election_id: int,
                  voter_id: int,
                  candidate_index: int,
                  ) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: election.cast_vote(voter_id, candidate_index),
            'Vote cast successfully.',
        )

    def cast_vote_in_region(self,
                            election_id: int,
                            voter_id: int,
                            candidate_index: int,
                            region_code: str,
                            ) -> ServiceResponse:
        return self._run_in_region(
            election_id, region_code,
            lambda election, region: election.cast_vote_in_region(
                voter_id, candidate_index, region
            ),
            'Vote cast successfully.',
        )

    def check_voter_registration(self,
                                 election_id: int,
                                 voter_id: int,
                                 ) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: [
                'Registered: ' + _yes_no(
                    election.is_voter_registered(voter_id)
                ),
                'Has Voted: ' + _yes_no(election.has_voter_voted(voter_id)),
            ],
            'Voter status retrieved.',
        )

    def get_candidates(self, election_id: int) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: [
                f'{i}. {cand.label}'
                for i, cand in enumerate(election.candidates)
            ],
            'Candidates retrieved.',
        )

    def get_voters(self, election_id: int) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: [
                f'{voter.unique_id}: {voter.full_name}'
                for voter in election.all_voters()
            ],
            'Voters retrieved.',
        )

    def get_election_results(self, election_id: int) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: [
                f'{row.rank}. {row.label} - {row.votes} votes'
                for row in election.results()
            ],
            'Election results retrieved.',
        )

    # Administrative operations

    def add_candidate(self, election_id: int, name: str) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: election.add_candidate(name),
            f"Candidate '{name}' added successfully.",
        )

    def add_candidate_with_party(self,
                                 election_id: int,
                                 name: str,
                                 party_name: str,
                                 ) -> ServiceResponse:
        '''Add a flat-ballot candidate for a party given by name.

        The first party of that name is used; one is created if there is
        none.
        '''
        return self._run(
            election_id,
            lambda election: _add_party_candidate(election, name, party_name),
            f"Candidate '{name}' added to party '{party_name}'.",
        )

    def create_party(self,
                     election_id: int,
                     party_name: str,
                     ) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: election.create_party(party_name),
            f"Party '{party_name}' created successfully.",
        )

    def get_parties(self, election_id: int) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: [party.name for party in election.parties],
            'Parties retrieved.',
        )

    def create_region(self,
                      election_id: int,
                      name: str,
                      code: str,
                      ) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: election.create_region(name, code),
            f"Region '{name}' created with code {code}.",
        )

    def add_candidate_to_region(self,
                                election_id: int,
                                name: str,
                                region_code: str,
                                party_name: Optional[str] = None,
                                ) -> ServiceResponse:
        '''Register a candidate in a region, for a party given by name.

        The party is looked up like in :meth:`add_candidate_with_party`;
        no party name makes an independent candidate.
        '''
        return self._run_in_region(
            election_id, region_code,
            lambda election, region: _add_regional_candidate(
                election, name, region, party_name
            ),
            f"Candidate '{name}' added to region {region_code}.",
        )

    # Persistence

    def save_election_results(self,
                              election_id: int,
                              path: str,
                              ) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: election.save_results_to_file(path),
            f"Election results saved to '{path}'.",
        )

    def save_complete_election_data(self,
                                    election_id: int,
                                    path: str,
                                    ) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: election.save_complete_election_data(path),
            f"Complete election data saved to '{path}'.",
        )

    def load_election_data(self,
                           election_id: int,
                           path: str,
                           ) -> ServiceResponse:
        with self.registry.lock:
            election = self.registry.get_election(election_id)
            if election is None:
                return ServiceResponse(False, ELECTION_NOT_FOUND)
            if election.load_complete_election_data(path):
                return ServiceResponse(
                    True, f"Election data loaded from '{path}'."
                )
            else:
                return ServiceResponse(
                    False, f"Failed to load election data from '{path}'."
                )

    def export_election_to_csv(self,
                               election_id: int,
                               base_name: str,
                               ) -> ServiceResponse:
        return self._run(
            election_id,
            lambda election: list(election.export_to_csv(base_name).values()),
            'Election data exported to CSV files with base name'
            f" '{base_name}'.",
        )

    def _run(self,
             election_id: int,
             action: Callable[[Election], object],
             message: str,
             ) -> ServiceResponse:
        with self.registry.lock:
            election = self.registry.get_election(election_id)
            if election is None:
                return ServiceResponse(False, ELECTION_NOT_FOUND)
            try:
                output = action(election)
            except ValidationFailed as err:
                return ServiceResponse(
                    False, _error_message(err), list(err.errors)
                )
            except ElectionError as err:
                return ServiceResponse(False, _error_message(err))
        if isinstance(output, list):
            return ServiceResponse(True, message, output)
        else:
            return ServiceResponse(True, message)

    def _run_in_region(self,
                       election_id: int,
                       region_code: str,
                       action: Callable[[Election, Region], object],
                       message: str,
                       ) -> ServiceResponse:
        with self.registry.lock:
            election = self.registry.get_election(election_id)
            if election is None:
                return ServiceResponse(False, ELECTION_NOT_FOUND)
            region = election.region_by_code(region_code)
            if region is None:
                return ServiceResponse(False, REGION_NOT_FOUND)
            return self._run(
                election_id,
                lambda election: action(election, region),
                message,
            )


def _add_party_candidate(election: Election,
                         name: str,
                         party_name: str,
                         ) -> None:
    party = election.party_by_name(party_name)
    if party is None:
        election.check_candidate_name(name)
        party = election.create_party(party_name)
    election.add_candidate(name, party)


def _add_regional_candidate(election: Election,
                            name: str,
                            region: Region,
                            party_name: Optional[str],
                            ) -> None:
    if party_name is None:
        election.add_candidate_to_region(name, region)
        return
    party = election.party_by_name(party_name)
    if party is None:
        # a new party has no candidate anywhere, only the name can clash
        election.check_candidate_for_region(name, region)
        party = election.create_party(party_name)
    election.add_candidate_to_region(name, region, party)


def _error_message(err: ElectionError) -> str:
    message = str(err)
    if not message:
        return message
    if not message.endswith('.'):
        message += '.'
    return message[0].upper() + message[1:]


def _yes_no(flag: bool) -> str:
    return 'Yes' if flag else 'No'
