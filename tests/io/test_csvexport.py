
import sys
import os
import csv

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import clearballot.io.csvexport
from clearballot.election import Election


def read_rows(path):
    with open(path, encoding='utf8', newline='') as infile:
        return list(csv.reader(infile))


def test_export(tmp_path):
    election = Election('Town')
    greens = election.create_party('Greens')
    election.add_candidate('Alice', greens)
    election.add_candidate('Bob')
    north = election.create_region('North', 'N')
    election.add_candidate_to_region('Carol', north, greens)
    election.register_voter('John', 'Doe', '5551234567',
                            '1 Main Street, Springfield', '123456789', '30')
    election.register_voter('Mary', 'Major', '5559876543', '2 Side Street',
                            '987654321', '40')
    election.register_voter_in_region('Jane', 'Roe', '5550001111',
                                      '3 Hill Road', '111222333', '50', north)
    election.cast_vote(123456789, 0)
    election.cast_vote(987654321, 0)
    election.cast_vote_in_region(111222333, 0, north)

    base = str(tmp_path / 'town')
    paths = election.export_to_csv(base)
    assert paths == {
        'candidates': base + '_candidates.csv',
        'voters': base + '_voters.csv',
        'parties': base + '_parties.csv',
    }

    candidates = read_rows(paths['candidates'])
    assert candidates[0] == clearballot.io.csvexport.CANDIDATE_HEADER
    assert candidates[1:] == [
        ['0', 'Alice', 'Greens', '2', '100.00', ''],
        ['1', 'Bob', 'Independent', '0', '0.00', ''],
        ['0', 'Carol', 'Greens', '1', '100.00', 'N'],
    ]

    voters = read_rows(paths['voters'])
    assert voters[0] == clearballot.io.csvexport.VOTER_HEADER
    assert voters[1] == [
        '123456789', 'John', 'Doe', '30', '5551234567',
        '1 Main Street, Springfield', 'Yes', '',
    ]
    assert voters[3][-2:] == ['Yes', 'N']

    parties = read_rows(paths['parties'])
    assert parties == [
        clearballot.io.csvexport.PARTY_HEADER,
        ['Greens', '2', 'Alice;Carol'],
    ]


def test_text_quoted(tmp_path):
    election = Election('Town')
    election.register_voter('John', 'Doe', '5551234567', '1 Main Street',
                            '123456789', '30')
    paths = election.export_to_csv(str(tmp_path / 'town'))
    with open(paths['voters'], encoding='utf8') as infile:
        lines = infile.read().splitlines()
    assert lines[1].startswith('123456789,"John","Doe",30,"5551234567"')
