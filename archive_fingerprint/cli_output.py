"""
Helper to display a DiffReport on the command line.
"""

import sys

from archive_fingerprint.entry_data import DiffReport


class ReportPrinter:
    """
    Utility to print snapshot comparison reports.
    """

    def __init__(self, first_name: str, second_name: str, output=None):
        """
        :param first_name: Display name of the first snapshot.
        :param second_name: Display name of the second snapshot.
        :param output: Output stream to write to, defaults to the standard output.
        """
        self.first_name = first_name
        self.second_name = second_name
        self.output = output if output is not None else sys.stdout

    def line(self, *args):
        """
        Prints a line to the configured output stream.
        :param args: line contents
        """
        print(*args, file=self.output)

    def print_report(self, report: DiffReport):
        """
        Prints the header followed by one section per non-empty difference category.
        :param report: Report to print.
        """
        self.line(f'Comparing {self.first_name} and {self.second_name}')
        if report.is_empty():
            self.line('No differences found.')
            return

        sections = [
            (f'Exists in {self.first_name} but not in {self.second_name}:', report.only_in_first),
            (f'Exists in {self.second_name} but not in {self.first_name}:', report.only_in_second),
            ('Different content (method/hash):', report.content_differing),
            ('Different metadata:', report.metadata_differing),
        ]
        for title, paths in sections:
            if not paths:
                continue
            self.line()
            self.line(title)
            for path in paths:
                self.line('  ' + path)
