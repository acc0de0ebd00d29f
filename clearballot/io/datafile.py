"""Read and write complete election data files.

An election data file is a plain-text document made of ``[SECTION]`` headers
followed by ``key=value`` lines. Repeated entities are told apart by a
numeric index in the key::

    COMPLETE_ELECTION_DATA
    ======================

    [ELECTION_INFO]
    Title=Municipal Election
    TotalCandidates=1
    TotalVoters=1
    TotalParties=1
    TotalRegions=0

    [PARTIES]
    Party0=Greens
    Party0_Members=Alice Doe

    [CANDIDATES]
    Candidate0_Name=Alice Doe
    Candidate0_Votes=1
    Candidate0_Party=Greens

    [VOTERS]
    Voter0_FirstName=John
    ...
    Voter0_HasVoted=1

    [REGIONS]
    Region0_Name=North District
    Region0_Code=NORTH
    Region0_Candidate0_Name=...
    Region0_Voter0_FirstName=...

    [VOTING_SUMMARY]
    TotalVotesCast=1
    VoterTurnout=100.00%

``TotalCandidates`` and ``TotalVoters`` count the flat (non-regional) ballot
and roll only, while the ``[VOTING_SUMMARY]`` covers the whole election,
regions included; an election with regions only has ``TotalVoters=0`` next to a
non-zero turnout. The summary is derived and ignored on load.

Values are written as they are, without escaping. Voter fields, region names
and codes, and candidate and party names must therefore not contain line
breaks; candidate names must not contain the ``;`` separator of party member
lists, and no party can be named ``Independent``, which marks candidates
without a party. :class:`~clearballot.election.Election` rejects such values.
The election title is written as given.

Section and key names must be kept exactly as they are so that existing
files stay readable. The ``[REGIONS]`` section is optional; readers that do
not know it skip it like any other unknown section.

Loading is tolerant: it never fails in the middle of a file. Lines without
``=``, lines in unknown sections, unknown keys and values that cannot be
converted are skipped. An entity is only created once all its required
fields have been seen, in any order.
"""

from __future__ import annotations

import collections
import dataclasses
import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

import clearballot.io.core
import clearballot.report
from clearballot.candidate import INDEPENDENT_LABEL
from clearballot.validate import MEMBER_SEPARATOR

logger = logging.getLogger(__name__)

BANNER: str = 'COMPLETE_ELECTION_DATA'

ELECTION_INFO: str = 'ELECTION_INFO'
PARTIES: str = 'PARTIES'
CANDIDATES: str = 'CANDIDATES'
VOTERS: str = 'VOTERS'
REGIONS: str = 'REGIONS'
VOTING_SUMMARY: str = 'VOTING_SUMMARY'


@dataclasses.dataclass
class PartyRecord:
    name: str
    members: List[str] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class CandidateRecord:
    name: str
    votes: int = 0
    party: Optional[str] = None


@dataclasses.dataclass
class VoterRecord:
    first_name: str
    last_name: str
    phone_number: str
    address: str
    unique_id: int
    age: int
    has_voted: bool


@dataclasses.dataclass
class RegionRecord:
    name: str
    code: str
    candidates: List[CandidateRecord] = dataclasses.field(
        default_factory=list
    )
    voters: List[VoterRecord] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class ElectionData:
    """Contents of an election data file."""
    title: Optional[str] = None
    parties: List[PartyRecord] = dataclasses.field(default_factory=list)
    candidates: List[CandidateRecord] = dataclasses.field(
        default_factory=list
    )
    voters: List[VoterRecord] = dataclasses.field(default_factory=list)
    regions: List[RegionRecord] = dataclasses.field(default_factory=list)


def _decode_count(value: str) -> int:
    count = int(value)
    if count < 0:
        raise ValueError(f'negative count: {value!r}')
    return count


def _decode_flag(value: str) -> bool:
    if value == '1':
        return True
    elif value == '0':
        return False
    else:
        raise ValueError(f'invalid flag: {value!r}')


def _encode_flag(value: bool) -> str:
    return '1' if value else '0'


def _decode_members(value: str) -> List[str]:
    return value.split(MEMBER_SEPARATOR) if value else []


def _encode_members(value: List[str]) -> str:
    return MEMBER_SEPARATOR.join(value)


def _decode_party(value: str) -> Optional[str]:
    return None if value == INDEPENDENT_LABEL else value


def _encode_party(value: Optional[str]) -> str:
    return INDEPENDENT_LABEL if value is None else value


@dataclasses.dataclass(frozen=True)
class Field:
    """A typed field of a record in the file.

    :param key: Key suffix in the file (the part after the underscore);
        an empty string for a bare indexed key such as ``Party0``.
    :param attr: Name of the record attribute.
    :param decode: Converts the text value; raises ValueError if invalid.
    :param encode: Converts the attribute value to text.
    :param required: Whether the record is incomplete without the field.
    """
    key: str
    attr: str
    decode: Callable[[str], Any] = str
    encode: Callable[[Any], str] = str
    required: bool = True


PARTY_FIELDS: List[Field] = [
    Field('', 'name'),
    Field('Members', 'members', _decode_members, _encode_members,
          required=False),
]
CANDIDATE_FIELDS: List[Field] = [
    Field('Name', 'name'),
    Field('Votes', 'votes', _decode_count, required=False),
    Field('Party', 'party', _decode_party, _encode_party, required=False),
]
VOTER_FIELDS: List[Field] = [
    Field('FirstName', 'first_name'),
    Field('LastName', 'last_name'),
    Field('Phone', 'phone_number'),
    Field('Address', 'address'),
    Field('UniqueId', 'unique_id', int),
    Field('Age', 'age', int),
    Field('HasVoted', 'has_voted', _decode_flag, _encode_flag),
]
REGION_FIELDS: List[Field] = [
    Field('Name', 'name'),
    Field('Code', 'code'),
]

PARTY_KEY_RE = re.compile(r'Party(\d+)(?:_(\w+))?')
CANDIDATE_KEY_RE = re.compile(r'Candidate(\d+)_(\w+)')
VOTER_KEY_RE = re.compile(r'Voter(\d+)_(\w+)')
REGION_KEY_RE = re.compile(r'Region(\d+)_(?:(Candidate|Voter)(\d+)_)?(\w+)')


class RecordBuilder:
    """Accumulate indexed fields and materialize complete records.

    :param record_type: Dataclass to create the records as.
    :param fields: Fields of the record.
    """
    def __init__(self, record_type: type, fields: List[Field]):
        self.record_type = record_type
        self.fields = {field.key: field for field in fields}
        self._values: Dict[int, Dict[str, Any]] = collections.defaultdict(
            dict
        )

    def feed(self, index: int, key: str, value: str) -> bool:
        """Record a field value for the record at the given index.

        :returns: False if the key is unknown or the value invalid (in which
            case it is ignored), True otherwise.
        """
        field = self.fields.get(key)
        if field is None:
            return False
        try:
            self._values[index][field.attr] = field.decode(value)
        except ValueError:
            logger.debug('invalid value for %s of record %d: %r',
                         key or self.record_type.__name__, index, value)
            return False
        return True

    def records(self) -> List[Any]:
        """Return complete records in the order of their indices."""
        return list(self.indexed_records().values())

    def indexed_records(self) -> Dict[int, Any]:
        complete = {}
        for index in sorted(self._values):
            values = self._values[index]
            missing = [
                field.key for field in self.fields.values()
                if field.required and field.attr not in values
            ]
            if missing:
                logger.debug('skipping incomplete %s %d, missing %s',
                             self.record_type.__name__, index, missing)
            else:
                complete[index] = self.record_type(**values)
        return complete


class RegionRecordBuilder:
    """Accumulate regions together with their candidates and voters."""
    def __init__(self):
        self.regions = RecordBuilder(RegionRecord, REGION_FIELDS)
        self.candidates: Dict[int, RecordBuilder] = {}
        self.voters: Dict[int, RecordBuilder] = {}

    def feed(self,
             index: int,
             entity: Optional[str],
             entity_index: Optional[int],
             key: str,
             value: str,
             ) -> bool:
        if entity is None:
            return self.regions.feed(index, key, value)
        elif entity == 'Candidate':
            builder = self.candidates.setdefault(
                index, RecordBuilder(CandidateRecord, CANDIDATE_FIELDS)
            )
        else:
            builder = self.voters.setdefault(
                index, RecordBuilder(VoterRecord, VOTER_FIELDS)
            )
        return builder.feed(entity_index, key, value)

    def records(self) -> List[RegionRecord]:
        regions = []
        for index, region in self.regions.indexed_records().items():
            if index in self.candidates:
                region.candidates = self.candidates[index].records()
            if index in self.voters:
                region.voters = self.voters[index].records()
            regions.append(region)
        return regions


def snapshot(election: Any) -> ElectionData:
    """Capture the state of an election as file records.

    :param election: An :class:`~clearballot.election.Election`.
    """
    return ElectionData(
        title=election.title,
        parties=[
            PartyRecord(party.name, list(party.members))
            for party in election.parties
        ],
        candidates=[_candidate_record(cand) for cand in election.candidates],
        voters=[_voter_record(voter) for voter in election.voters],
        regions=[
            RegionRecord(
                region.name,
                region.code,
                [_candidate_record(cand) for cand in region.candidates],
                [_voter_record(voter) for voter in region.voters],
            )
            for region in election.regions
        ],
    )


def _candidate_record(candidate: Any) -> CandidateRecord:
    return CandidateRecord(
        candidate.name,
        candidate.vote_count,
        None if candidate.party is None else candidate.party.name,
    )


def _voter_record(voter: Any) -> VoterRecord:
    return VoterRecord(
        voter.first_name,
        voter.last_name,
        voter.phone_number,
        voter.address,
        voter.unique_id,
        voter.age,
        voter.has_voted,
    )


def dump_lines(election: Any) -> Iterable[str]:
    """Dump the complete state of the election into data file lines.

    :param election: An :class:`~clearballot.election.Election`.
    """
    data = snapshot(election)
    yield BANNER
    yield '=' * len(BANNER)
    yield ''
    yield f'[{ELECTION_INFO}]'
    yield f'Title={data.title}'
    yield f'TotalCandidates={len(data.candidates)}'
    yield f'TotalVoters={len(data.voters)}'
    yield f'TotalParties={len(data.parties)}'
    yield f'TotalRegions={len(data.regions)}'
    yield ''
    yield f'[{PARTIES}]'
    for i, party in enumerate(data.parties):
        yield from _dump_record(f'Party{i}', party, PARTY_FIELDS)
    yield ''
    yield f'[{CANDIDATES}]'
    for i, cand in enumerate(data.candidates):
        yield from _dump_record(f'Candidate{i}', cand, CANDIDATE_FIELDS)
    yield ''
    yield f'[{VOTERS}]'
    for i, voter in enumerate(data.voters):
        yield from _dump_record(f'Voter{i}', voter, VOTER_FIELDS)
    yield ''
    if data.regions:
        yield f'[{REGIONS}]'
        for i, region in enumerate(data.regions):
            yield from _dump_region(f'Region{i}', region)
        yield ''
    yield f'[{VOTING_SUMMARY}]'
    all_candidates = election.all_candidates()
    n_voters = len(election.all_voters())
    total_votes = clearballot.report.total_votes(all_candidates)
    turnout = clearballot.report.vote_percentage(total_votes, n_voters)
    yield f'TotalVotesCast={total_votes}'
    yield f'VoterTurnout={turnout:.2f}%'


dump, dumps = clearballot.io.core.dumpers(dump_lines)


def _dump_record(prefix: str, record: Any, fields: List[Field]
                 ) -> Iterable[str]:
    for field in fields:
        key = f'{prefix}_{field.key}' if field.key else prefix
        yield f'{key}={field.encode(getattr(record, field.attr))}'


def _dump_region(prefix: str, region: RegionRecord) -> Iterable[str]:
    yield from _dump_record(prefix, region, REGION_FIELDS)
    for i, cand in enumerate(region.candidates):
        yield from _dump_record(
            f'{prefix}_Candidate{i}', cand, CANDIDATE_FIELDS
        )
    for i, voter in enumerate(region.voters):
        yield from _dump_record(f'{prefix}_Voter{i}', voter, VOTER_FIELDS)


def load_lines(lines: Iterable[str]) -> ElectionData:
    """Load election data from data file lines.

    Never raises on malformed content; anything that cannot be understood
    is skipped.
    """
    title = None
    parties = RecordBuilder(PartyRecord, PARTY_FIELDS)
    candidates = RecordBuilder(CandidateRecord, CANDIDATE_FIELDS)
    voters = RecordBuilder(VoterRecord, VOTER_FIELDS)
    regions = RegionRecordBuilder()
    section = None
    for line_i, line in enumerate(lines):
        line = line.rstrip('\r\n')
        if not line or line.startswith('=') or line == BANNER:
            continue
        if line.startswith('[') and line.endswith(']'):
            section = line[1:-1]
            continue
        key, value = _parse_key_value(line)
        if key is None:
            logger.debug('skipping line %d without key: %r', line_i, line)
            continue
        if section == ELECTION_INFO:
            if key == 'Title':
                title = value
            continue
        elif section == PARTIES:
            parsed = _match_indexed(PARTY_KEY_RE, key)
            used = parsed is not None and parties.feed(*parsed, value)
        elif section == CANDIDATES:
            parsed = _match_indexed(CANDIDATE_KEY_RE, key)
            used = parsed is not None and candidates.feed(*parsed, value)
        elif section == VOTERS:
            parsed = _match_indexed(VOTER_KEY_RE, key)
            used = parsed is not None and voters.feed(*parsed, value)
        elif section == REGIONS:
            parsed = _match_region(key)
            used = parsed is not None and regions.feed(*parsed, value)
        else:
            # summary values are derived, unknown sections are ignored
            continue
        if not used:
            logger.debug('skipping line %d in %s: %r', line_i, section, line)
    return ElectionData(
        title=title,
        parties=parties.records(),
        candidates=candidates.records(),
        voters=voters.records(),
        regions=regions.records(),
    )


load, loads = clearballot.io.core.loaders(load_lines)


def _parse_key_value(line: str) -> Tuple[Optional[str], Optional[str]]:
    if '=' not in line:
        return None, None
    key, value = line.split('=', 1)
    return key, value


def _match_indexed(pattern: re.Pattern, key: str
                   ) -> Optional[Tuple[int, str]]:
    match = pattern.fullmatch(key)
    if match is None:
        return None
    return int(match.group(1)), match.group(2) or ''


def _match_region(key: str
                  ) -> Optional[Tuple[int, Optional[str], Optional[int], str]]:
    match = REGION_KEY_RE.fullmatch(key)
    if match is None:
        return None
    index, entity, entity_index, field_key = match.groups()
    return (
        int(index),
        entity,
        None if entity_index is None else int(entity_index),
        field_key,
    )
