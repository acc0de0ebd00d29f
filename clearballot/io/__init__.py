"""Input/output of elections to files.

This subpackage is structured into modules by file format:
:mod:`clearballot.io.datafile` saves and restores the complete state of an
election, :mod:`clearballot.io.csvexport` exports it for spreadsheets.
"""
