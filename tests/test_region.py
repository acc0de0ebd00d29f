
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import clearballot.errors
from clearballot.candidate import Candidate, Party
from clearballot.region import Region
from clearballot.voter import Voter


def make_voter(unique_id, region_code='N'):
    return Voter('Jane', 'Doe', '5551234567', '1 Main Street', unique_id, 30,
                 region_code)


def test_candidate_order():
    region = Region('North', 'N')
    region.add_candidate(Candidate('Alice', region_code='N'))
    region.add_candidate(Candidate('Bob', region_code='N'))
    assert [cand.name for cand in region.candidates] == ['Alice', 'Bob']


def test_duplicate_candidate():
    region = Region('North', 'N')
    region.add_candidate(Candidate('Alice'))
    with pytest.raises(clearballot.errors.DuplicateCandidateInRegion):
        region.add_candidate(Candidate('Alice'))
    assert len(region.candidates) == 1


def test_party_once_per_region():
    region = Region('North', 'N')
    greens = Party('Greens')
    alice = Candidate('Alice', greens)
    region.add_candidate(alice)
    assert region.has_party(greens)
    # another party object of the same name is the same party here
    with pytest.raises(clearballot.errors.PartyAlreadyRepresented) as excinfo:
        region.add_candidate(Candidate('Bob', Party('Greens')))
    assert excinfo.value.party == 'Greens'
    assert region.candidates == [alice]
    assert alice.vote_count == 0


def test_check_candidate_leaves_region_unchanged():
    region = Region('North', 'N')
    greens = Party('Greens')
    region.check_candidate(Candidate('Alice', greens))
    assert region.candidates == [] and not region.has_party(greens)
    region.add_candidate(Candidate('Alice', greens))
    with pytest.raises(clearballot.errors.DuplicateCandidateInRegion):
        region.check_candidate(Candidate('Alice'))
    with pytest.raises(clearballot.errors.PartyAlreadyRepresented):
        region.check_candidate(Candidate('Bob', greens))
    assert len(region.candidates) == 1

def test_party_name_case_sensitive():
    region = Region('North', 'N')
    region.add_candidate(Candidate('Alice', Party('Greens')))
    region.add_candidate(Candidate('Bob', Party('GREENS')))
    assert len(region.parties) == 2


def test_independents_unrestricted():
    region = Region('North', 'N')
    region.add_candidate(Candidate('Alice'))
    region.add_candidate(Candidate('Bob'))
    assert not region.has_party_candidate(None)
    assert region.parties == []


def test_voters():
    region = Region('North', 'N')
    region.add_voter(make_voter(123456789))
    assert region.has_voter(123456789)
    assert region.can_voter_vote_in_region(123456789)
    assert not region.has_voter(987654321)
    assert region.find_voter(123456789).full_name == 'Jane Doe'
    assert region.find_voter(987654321) is None
    with pytest.raises(clearballot.errors.DuplicateVoterInRegion):
        region.add_voter(make_voter(123456789))
    assert len(region.voters) == 1


def test_total_votes():
    region = Region('North', 'N')
    alice = Candidate('Alice')
    bob = Candidate('Bob')
    region.add_candidate(alice)
    region.add_candidate(bob)
    alice.receive_vote()
    alice.receive_vote()
    bob.receive_vote()
    assert region.total_votes == 3
