
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import clearballot.errors
from clearballot.candidate import Candidate, Party
from clearballot.voter import Voter


def test_party_name_read_only():
    party = Party('Greens')
    with pytest.raises(AttributeError):
        party.name = 'Reds'
    party.add_member('Alice')
    assert party.members == ['Alice']


def test_candidate_labels():
    alice = Candidate('Alice', Party('Greens'), 'N')
    bob = Candidate('Bob')
    assert alice.label == 'Alice (Greens)'
    assert bob.label == 'Bob (Independent)'
    assert bob.is_independent
    assert not alice.is_independent
    assert alice.is_in_region('N')
    assert not alice.is_in_region('S')
    assert not bob.is_in_region(None)


def test_vote_count():
    cand = Candidate('Alice')
    assert cand.vote_count == 0
    cand.receive_vote()
    cand.receive_vote()
    assert cand.vote_count == 2
    with pytest.raises(AttributeError):
        cand.vote_count = 0


@pytest.mark.parametrize(('age', 'is_eligible'), [
    (17, False),
    (18, True),
    (90, True),
])
def test_voter_eligibility(age, is_eligible):
    voter = Voter('Jane', 'Doe', '5551234567', '1 Main Street', 123456789,
                  age)
    assert voter.is_eligible == is_eligible


def test_voted_once():
    voter = Voter('Jane', 'Doe', '5551234567', '1 Main Street', 123456789,
                  30, 'N')
    assert not voter.has_voted
    assert voter.can_vote_in_region('N')
    assert not voter.can_vote_in_region('S')
    voter.mark_as_voted()
    assert voter.has_voted
    with pytest.raises(clearballot.errors.AlreadyVoted):
        voter.mark_as_voted()
    assert voter.has_voted
