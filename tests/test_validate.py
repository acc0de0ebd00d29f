
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import clearballot.validate


@pytest.mark.parametrize(('age', 'is_valid'), [
    ('18', True),
    ('17', False),
    ('120', True),
    ('121', False),
    (' 25 ', True),
    ('', False),
    ('2a', False),
    ('-20', False),
])
def test_age(age, is_valid):
    assert clearballot.validate.is_valid_age(age) == is_valid


@pytest.mark.parametrize(('phone', 'is_valid'), [
    ('5551234567', True),
    ('555123456', False),
    ('55512345678', False),
    ('555-123-45', False),
    ('\t5551234567\n', True),
    ('', False),
])
def test_phone_number(phone, is_valid):
    assert clearballot.validate.is_valid_phone_number(phone) == is_valid


@pytest.mark.parametrize(('unique_id', 'is_valid'), [
    ('123456789', True),
    ('12345678', False),
    ('1234567890', False),
    ('12345678x', False),
    ('000000001', True),
])
def test_unique_id(unique_id, is_valid):
    assert clearballot.validate.is_valid_unique_id(unique_id) == is_valid


@pytest.mark.parametrize(('name', 'is_valid'), [
    ('Al', True),
    ('A', False),
    ('A' * 50, True),
    ('A' * 51, False),
    ('Mary Ann', True),
    ('R2D2', False),
    ("O'Brien", False),
    ('   ', False),
])
def test_name(name, is_valid):
    assert clearballot.validate.is_valid_name(name) == is_valid


@pytest.mark.parametrize(('address', 'is_valid'), [
    ('1 Rd', False),
    ('1 Rd.', True),
    ('x' * 500, True),
    ('x' * 501, False),
    ('', False),
    ('1 Main Street\nApt 4', False),
    ('1 Main Street\r\nApt 4', False),
    ('1 Main Street\n', True),
])
def test_address(address, is_valid):
    assert clearballot.validate.is_valid_address(address) == is_valid


def test_messages():
    assert clearballot.validate.validate_name('', 'First name') == \
        'First name cannot be empty.'
    assert clearballot.validate.validate_phone_number('123') == \
        'Phone number must be exactly 10 digits long.'
    assert clearballot.validate.validate_age('17') == \
        'You must be at least 18 years old to register.'


def test_all_errors_collected():
    errors = clearballot.validate.validate_voter_input(
        'J', 'Doe', '123', '1 Main Street', '123456789', '16'
    )
    assert len(errors) == 3
    assert errors[0].startswith('First name')
    assert errors[1].startswith('Phone number')
    assert errors[2].startswith('You must be')


def test_valid_input():
    assert clearballot.validate.validate_voter_input(
        ' John ', 'Doe', '5551234567', '1 Main Street', '123456789', '30'
    ) == []


def test_address_line_break_message():
    assert clearballot.validate.validate_address('1 Main St\nApt 4') == \
        'Address must not contain line breaks.'


@pytest.mark.parametrize(('name', 'is_valid'), [
    ('Alice Doe', True),
    ('Smith; Jr', False),
    ('Alice\nDoe', False),
    ('Alice\rDoe', False),
    ('Jean-Luc O\'Neill', True),
])
def test_candidate_name(name, is_valid):
    assert clearballot.validate.is_valid_candidate_name(name) == is_valid


@pytest.mark.parametrize(('name', 'is_valid'), [
    ('Greens', True),
    ('Independent', False),
    ('Independents', True),
    ('Green\nParty', False),
    ('Left; Right', True),
])
def test_party_name(name, is_valid):
    assert clearballot.validate.is_valid_party_name(name) == is_valid
