'''Registered voters.

A voter record holds the identity of the voter and whether they have voted,
never whom they voted for.
'''

from typing import Optional

from clearballot.errors import AlreadyVoted


ELIGIBLE_AGE: int = 18


class Voter:
    '''A voter registered in the election.

    The voted flag goes from False to True exactly once, through
    :meth:`mark_as_voted`, and is never reset.

    :param first_name: First name of the voter.
    :param last_name: Last name of the voter.
    :param phone_number: Phone number, ten digits.
    :param address: Postal address in any customary format.
    :param unique_id: Numeric ID, unique across the whole election.
    :param age: Age of the voter in years.
    :param region_code: Code of the region the voter is registered in; None
        for voters on the flat (non-regional) roll.
    '''
    def __init__(self,
                 first_name: str,
                 last_name: str,
                 phone_number: str,
                 address: str,
                 unique_id: int,
                 age: int,
                 region_code: Optional[str] = None,
                 ):
        self.first_name = first_name
        self.last_name = last_name
        self.phone_number = phone_number
        self.address = address
        self.unique_id = unique_id
        self.age = age
        self.region_code = region_code
        self._voted = False

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'

    @property
    def has_voted(self) -> bool:
        return self._voted

    @property
    def is_eligible(self) -> bool:
        return self.age >= ELIGIBLE_AGE

    def mark_as_voted(self) -> None:
        '''Record that the voter has cast their vote.

        :raises AlreadyVoted: If the voter has voted before.
        '''
        if self._voted:
            raise AlreadyVoted(self.unique_id)
        self._voted = True

    def can_vote_in_region(self, region_code: Optional[str]) -> bool:
        return region_code is not None and self.region_code == region_code

    def __repr__(self) -> str:
        return f'<Voter({self.unique_id},{self.full_name})>'
