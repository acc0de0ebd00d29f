"""A commandline tool for quick inspection of saved elections.

Loads a complete election data file and shows its results, for the whole
election or a single region. Can also list the candidates and voters, export
the election to CSV and write a plain results summary.
"""

import argparse
import logging
import warnings
from typing import Optional

from clearballot.election import Election
from clearballot.region import Region

argparser = argparse.ArgumentParser(
    prog='clearballot',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    help='complete election data file to load',
)
argparser.add_argument(
    '-r', '--region',
    help='show only the region with this code',
)
argparser.add_argument(
    '-l', '--list',
    dest='with_lists',
    action='store_true',
    help='list candidates and voters before the results',
)
argparser.add_argument(
    '-c', '--csv-base',
    help='export the election to CSV files with this path prefix',
)
argparser.add_argument(
    '-o', '--output-results',
    help='write a plain results summary of the flat ballot to this file',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all log messages and other info',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any log messages or other info',
)


def main(input_file: str,
         region: Optional[str] = None,
         with_lists: bool = False,
         csv_base: Optional[str] = None,
         output_results: Optional[str] = None,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    election = load_election(input_file)
    if election is None:
        warnings.warn(f'cannot load election from {input_file}, terminating')
        return
    if region is None:
        show_election(election, with_lists)
    else:
        selected = election.region_by_code(region)
        if selected is None:
            warnings.warn(
                f'unknown region {region}, available: '
                + ', '.join(reg.code for reg in election.regions)
                + '; terminating'
            )
            return
        show_region(election, selected, with_lists)
    if csv_base:
        election.export_to_csv(csv_base)
    if output_results:
        election.save_results_to_file(output_results)


def load_election(input_file: str) -> Optional[Election]:
    """Load the election from a complete election data file."""
    election = Election('')
    if election.load_complete_election_data(input_file):
        return election
    else:
        return None


def show_election(election: Election, with_lists: bool = False) -> None:
    """Show the flat ballot (if used) and the results of all regions."""
    if with_lists:
        election.display_parties()
        election.display_regions()
    if election.candidates or not election.regions:
        if with_lists:
            election.display_candidates()
            election.display_voters()
        election.display_results()
    for region in election.regions:
        show_region(election, region, with_lists)
    print()
    print(f'Total votes cast: {election.total_votes()}')
    print(f'Voter turnout: {election.turnout():.2f}%')


def show_region(election: Election,
                region: Region,
                with_lists: bool = False,
                ) -> None:
    if with_lists:
        election.display_candidates_in_region(region)
        election.display_voters_in_region(region)
    election.display_results_in_region(region)


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file:
        argparser.print_usage()
    else:
        main(**vars(args))
