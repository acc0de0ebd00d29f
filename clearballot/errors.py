'''Errors raised by election operations.

All of them derive from :class:`ElectionError`. None of them is fatal: an
operation that raises one leaves the election exactly as it was before the
call, so the caller can correct the input and retry.
'''

from typing import Any, List, Optional


class ElectionError(Exception):
    '''An election operation was rejected.'''
    pass


class ValidationFailed(ElectionError):
    '''One or more voter registration fields are syntactically invalid.

    :param errors: Human-readable messages, one per failing field, in the
        order the fields were checked.
    '''
    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__('validation failed: ' + ' '.join(self.errors))


class RegistrationError(ElectionError):
    '''A registration would break an uniqueness rule of the election.'''
    pass


class DuplicateVoterId(RegistrationError):
    '''A voter with the given ID is already registered in the election.

    :param voter_id: The conflicting voter ID.
    '''
    def __init__(self, voter_id: int):
        self.voter_id = voter_id
        super().__init__(f'voter with ID {voter_id} already exists')


class DuplicateVoterInRegion(RegistrationError):
    '''A voter with the given ID is already registered in the region.

    :param voter_id: The conflicting voter ID.
    :param region: Code of the region.
    '''
    def __init__(self, voter_id: int, region: str):
        self.voter_id = voter_id
        self.region = region
        super().__init__(
            f'voter with ID {voter_id} already registered in region {region}'
        )


class DuplicateRegionCode(RegistrationError):
    '''A region with the given code already exists.

    :param code: The conflicting region code.
    '''
    def __init__(self, code: str):
        self.code = code
        super().__init__(f'region with code {code!r} already exists')


class InvalidRegion(RegistrationError):
    '''The region name or code contains a line break.

    :param name: Name of the region.
    :param code: Code of the region.
    '''
    def __init__(self, name: str, code: str):
        self.name = name
        self.code = code
        super().__init__(f'invalid region: {name!r} ({code!r})')


class InvalidPartyName(RegistrationError):
    '''The party name cannot be stored in an election data file.

    Party names must not contain line breaks, and ``Independent`` is
    reserved for candidates without a party.

    :param party: The rejected party name.
    '''
    def __init__(self, party: str):
        self.party = party
        super().__init__(f'invalid party name: {party!r}')


class CandidateError(ElectionError):
    '''A candidate cannot stand in the given context.

    :param candidate: Name of the candidate.
    :param region: Code of the region where the candidacy was attempted,
        if any.
    '''
    def __init__(self,
                 candidate: str,
                 region: Optional[str] = None,
                 message: Optional[str] = None,
                 ):
        self.candidate = candidate
        self.region = region
        if message is None:
            message = f'invalid candidate: {candidate}'
        super().__init__(message)


class DuplicateCandidateInRegion(CandidateError):
    '''A candidate of the same name is already registered in the region.'''
    def __init__(self, candidate: str, region: str):
        super().__init__(
            candidate, region,
            f'candidate {candidate!r} already registered in region {region}'
        )


class InvalidCandidateName(CandidateError):
    '''The candidate name contains a line break or a member separator.'''
    def __init__(self, candidate: str, region: Optional[str] = None):
        super().__init__(
            candidate, region, f'invalid candidate name: {candidate!r}'
        )


class PartyAlreadyRepresented(CandidateError):
    '''The candidate's party already has a candidate in the region.

    :param party: Name of the party.
    '''
    def __init__(self, candidate: str, region: str, party: str):
        self.party = party
        super().__init__(
            candidate, region,
            f'party {party!r} already has a candidate in region {region}'
        )


class CandidateAlreadyInAnotherRegion(CandidateError):
    '''The candidate name is already registered in some region.

    A candidate name can be used in at most one region of an election, and
    only once there.

    :param registered_in: Codes of the regions holding the name.
    '''
    def __init__(self, candidate: str, region: str, registered_in: Any = ()):
        self.registered_in = sorted(registered_in)
        super().__init__(
            candidate, region,
            f'candidate {candidate!r} already registered in region(s) '
            + ', '.join(self.registered_in)
        )


class VoteError(ElectionError):
    '''A vote cannot be cast.'''
    pass


class VoterNotFound(VoteError):
    '''No voter with the given ID is registered for the ballot.

    :param voter_id: The unknown voter ID.
    '''
    def __init__(self, voter_id: int):
        self.voter_id = voter_id
        super().__init__(f'voter with ID {voter_id} is not registered')


class VoterNotInRegion(VoteError):
    '''The voter is not registered in the region where they try to vote.

    :param voter_id: The voter ID.
    :param region: Code of the region.
    '''
    def __init__(self, voter_id: int, region: str):
        self.voter_id = voter_id
        self.region = region
        super().__init__(
            f'voter with ID {voter_id} is not registered to vote'
            f' in region {region}'
        )


class AlreadyVoted(VoteError):
    '''The voter has already cast their vote.

    :param voter_id: The voter ID.
    '''
    def __init__(self, voter_id: int):
        self.voter_id = voter_id
        super().__init__(f'voter with ID {voter_id} has already voted')


class InvalidCandidateIndex(VoteError):
    '''The candidate index is out of range for the ballot.

    :param index: The requested index.
    :param n_candidates: Number of candidates on the ballot.
    '''
    def __init__(self, index: int, n_candidates: int):
        self.index = index
        self.n_candidates = n_candidates
        super().__init__(
            f'invalid candidate index: {index},'
            f' must be >=0 and <{n_candidates}'
        )


class FileOpenFailed(ElectionError):
    '''An election file could not be opened.

    The underlying :class:`OSError` is chained as the cause.

    :param path: Path of the file.
    :param mode: ``'r'`` or ``'w'``.
    '''
    def __init__(self, path: str, mode: str = 'r'):
        self.path = path
        self.mode = mode
        purpose = 'writing' if mode == 'w' else 'reading'
        super().__init__(f'could not open file {path} for {purpose}')
