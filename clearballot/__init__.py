"""ClearBallot - a data model for regional elections.

ClearBallot keeps the state of an election: its parties, its regions with
their candidates and registered voters, and the votes cast. It enforces the
rules of regional elections:

-   A candidate name can be used in only one region of the election.
-   A party can have at most one candidate in a region.
-   A voter can only vote in the region they registered in, and only once.

The :class:`~clearballot.election.Election` object from the ``election``
module is the entry point; every change goes through its methods, which
check all rules before changing anything and raise an error from the
``errors`` module on rejection. Voter registration fields are validated by
the ``validate`` module and results are computed by the ``report`` module.

Elections can be saved and restored, or exported to CSV, by the modules of
the :mod:`io` subpackage. The ``service`` module manages several elections at
once behind a request/response interface.
"""

from clearballot.election import Election    # noqa: F401
from clearballot.region import Region    # noqa: F401
