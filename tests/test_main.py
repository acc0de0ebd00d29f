
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import clearballot.__main__
from clearballot.election import Election


@pytest.fixture
def data_file(tmp_path):
    election = Election('County Election')
    election.add_candidate('Flat Candidate')
    north = election.create_region('North', 'N')
    south = election.create_region('South', 'S')
    greens = election.create_party('Greens')
    election.add_candidate_to_region('Alice', north, greens)
    election.add_candidate_to_region('Bob', south, greens)
    election.register_voter_in_region(
        'John', 'Doe', '5551234567', '1 Main Street', '123456789', '30', north
    )
    election.cast_vote_in_region(123456789, 0, north)
    path = str(tmp_path / 'county.txt')
    election.save_complete_election_data(path)
    return path


def test_args():
    args = clearballot.__main__.argparser.parse_args(
        ['-i', 'data.txt', '-r', 'N', '-l', '-q']
    )
    assert args.input_file == 'data.txt'
    assert args.region == 'N'
    assert args.with_lists
    assert args.quiet
    assert args.csv_base is None


def test_all_regions(data_file, capsys):
    clearballot.__main__.main(data_file, quiet=True)
    out = capsys.readouterr().out
    assert '=== Election Results: County Election ===' in out
    assert '=== Election Results for Region: North ===' in out
    assert '=== Election Results for Region: South ===' in out
    assert '1. Alice (Greens) - 1 votes (100.0%)' in out
    assert 'Total votes cast: 1' in out


def test_single_region_with_lists(data_file, capsys):
    clearballot.__main__.main(data_file, region='S', with_lists=True,
                              quiet=True)
    out = capsys.readouterr().out
    assert '=== Candidates in South ===' in out
    assert 'No voters registered.' in out
    assert 'North' not in out


def test_unknown_region(data_file, tmp_path, capsys):
    with pytest.warns(UserWarning, match='unknown region X'):
        clearballot.__main__.main(
            data_file, region='X', csv_base=str(tmp_path / 'county'),
            quiet=True,
        )
    assert capsys.readouterr().out == ''
    assert not os.path.exists(str(tmp_path / 'county_candidates.csv'))


def test_outputs(data_file, tmp_path):
    results_path = str(tmp_path / 'results.txt')
    clearballot.__main__.main(
        data_file,
        csv_base=str(tmp_path / 'county'),
        output_results=results_path,
        quiet=True,
    )
    assert os.path.exists(str(tmp_path / 'county_candidates.csv'))
    with open(results_path, encoding='utf8') as infile:
        assert infile.readline().strip() == \
            'Election Results: County Election'


def test_missing_input(tmp_path, capsys):
    with pytest.warns(UserWarning):
        clearballot.__main__.main(str(tmp_path / 'nothing.txt'), quiet=True)
    assert capsys.readouterr().out == ''
