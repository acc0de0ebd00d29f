'''Syntax validation of voter registration fields.

The validators only check the shape of the raw strings (length, character
class, digit counts and the age range); they know nothing about the election
the voter is registering in. Each ``validate_*`` function returns an error
message, or None if the value is valid. :func:`validate_voter_input` checks
all fields of a registration and returns every error found, not just the
first one.

All values are trimmed of surrounding whitespace before being checked.

Candidate and party names are not validated for shape, only checked by
:func:`is_valid_candidate_name` and :func:`is_valid_party_name` for characters
that an election data file cannot hold.
'''

import re
from typing import List, Optional, Tuple

from clearballot.candidate import INDEPENDENT_LABEL


PHONE_NUMBER_LENGTH: int = 10
UNIQUE_ID_LENGTH: int = 9
NAME_LENGTH_BOUNDS: Tuple[int, int] = (2, 50)
ADDRESS_LENGTH_BOUNDS: Tuple[int, int] = (5, 500)
AGE_BOUNDS: Tuple[int, int] = (18, 120)

WHITESPACE: str = ' \t\r\n'
LINE_BREAKS: str = '\r\n'
MEMBER_SEPARATOR: str = ';'
DIGITS_RE = re.compile(r'[0-9]+')


class LengthChecker:
    '''A helper to check if the length of a value is in a specified range.

    :param bounds: A tuple with lower and upper bounds (inclusive) for the
        length.
    :param field_name: Name of the field to be checked (included in the
        error message).
    '''
    def __init__(self, bounds: Tuple[int, int], field_name: str):
        self.min_length, self.max_length = bounds
        self.field_name = field_name

    def check(self, value: str) -> Optional[str]:
        if len(value) < self.min_length:
            return (f'{self.field_name} must be at least {self.min_length}'
                    ' characters long.')
        elif len(value) > self.max_length:
            return (f'{self.field_name} must not exceed {self.max_length}'
                    ' characters.')
        else:
            return None


def trim(value: str) -> str:
    return value.strip(WHITESPACE)


def is_digits(value: str) -> bool:
    return DIGITS_RE.fullmatch(value) is not None


def has_line_break(value: str) -> bool:
    return any(char in LINE_BREAKS for char in value)


def is_alphabetic(value: str) -> bool:
    '''Return True if the value contains only letters and spaces.'''
    return all(char.isalpha() or char == ' ' for char in value)


def validate_name(name: str, field_name: str = 'Name') -> Optional[str]:
    name = trim(name)
    if not name:
        return f'{field_name} cannot be empty.'
    length_error = LengthChecker(NAME_LENGTH_BOUNDS, field_name).check(name)
    if length_error:
        return length_error
    if not is_alphabetic(name):
        return (f'{field_name} must contain only alphabetic characters'
                ' and spaces.')
    return None


def _validate_digit_string(value: str,
                           length: int,
                           field_name: str,
                           ) -> Optional[str]:
    value = trim(value)
    if not value:
        return f'{field_name} cannot be empty.'
    if len(value) != length:
        return f'{field_name} must be exactly {length} digits long.'
    if not is_digits(value):
        return f'{field_name} must contain only numeric digits.'
    return None


def validate_phone_number(phone: str) -> Optional[str]:
    return _validate_digit_string(phone, PHONE_NUMBER_LENGTH, 'Phone number')


def validate_unique_id(unique_id: str) -> Optional[str]:
    return _validate_digit_string(unique_id, UNIQUE_ID_LENGTH, 'Unique ID')


def validate_address(address: str) -> Optional[str]:
    address = trim(address)
    if not address:
        return 'Address cannot be empty.'
    if has_line_break(address):
        return 'Address must not contain line breaks.'
    return LengthChecker(ADDRESS_LENGTH_BOUNDS, 'Address').check(address)


def validate_age(age: str) -> Optional[str]:
    age = trim(age)
    if not age:
        return 'Age cannot be empty.'
    if not is_digits(age):
        return 'Age must be a valid number (digits only).'
    min_age, max_age = AGE_BOUNDS
    if int(age) < min_age:
        return f'You must be at least {min_age} years old to register.'
    if int(age) > max_age:
        return f'Age must not exceed {max_age} years.'
    return None


def validate_voter_input(first_name: str,
                         last_name: str,
                         phone_number: str,
                         address: str,
                         unique_id: str,
                         age: str,
                         ) -> List[str]:
    '''Validate all fields of a voter registration.

    :returns: Error messages for all invalid fields, in the order of the
        parameters. An empty list means the registration is syntactically
        valid.
    '''
    errors = [
        validate_name(first_name, 'First name'),
        validate_name(last_name, 'Last name'),
        validate_phone_number(phone_number),
        validate_address(address),
        validate_unique_id(unique_id),
        validate_age(age),
    ]
    return [error for error in errors if error is not None]


def is_valid_name(name: str) -> bool:
    return validate_name(name) is None


def is_valid_phone_number(phone: str) -> bool:
    return validate_phone_number(phone) is None


def is_valid_unique_id(unique_id: str) -> bool:
    return validate_unique_id(unique_id) is None


def is_valid_address(address: str) -> bool:
    return validate_address(address) is None


def is_valid_age(age: str) -> bool:
    return validate_age(age) is None


def is_valid_candidate_name(name: str) -> bool:
    '''Check that a candidate name can be stored in an election data file.

    The name must not contain line breaks or the separator of party member
    lists.
    '''
    return not has_line_break(name) and MEMBER_SEPARATOR not in name


def is_valid_party_name(name: str) -> bool:
    '''Check that a party name can be stored in an election data file.

    The name must not contain line breaks and must differ from the label of
    independent candidates.
    '''
    return not has_line_break(name) and name != INDEPENDENT_LABEL
