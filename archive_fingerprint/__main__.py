"""
Command-line interface to the archive-fingerprint module.
"""

import argparse
import logging
import pathlib as pl
import sys

from archive_fingerprint import ArchiveFingerprinter, FingerprintError, InputNotFound, \
    ReportPrinter
from archive_fingerprint.content_hashing import DEFAULT_HASH_ALGORITHM, fixed_length_algorithms

USAGE = ('usage: archive-fingerprint analyze <file.zip/jar>\n'
         '       archive-fingerprint compare <file1> <file2>\n')


class UsageError(Exception):
    """
    Error raised if the command line arguments do not match any of the subcommands.
    """


class _ArgumentParser(argparse.ArgumentParser):
    """
    Argument parser that reports malformed arguments to the caller instead of exiting. Created
    without `-h`, so a help request is reported as a malformed argument as well.
    """

    def error(self, message):
        raise UsageError(message)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f'{value} is not a positive number')
    return number


def build_parser() -> argparse.ArgumentParser:
    common = _ArgumentParser(add_help=False)
    common.add_argument('--verbose', '-v',
                        action='store_true',
                        help='Prints debug information to the error stream.')

    parser = _ArgumentParser('archive-fingerprint',
                             add_help=False,
                             description='''Fingerprints zip/jar archives and compares the
                             fingerprints.''')
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    analyze_parser = subparsers.add_parser('analyze',
                                           parents=[common],
                                           add_help=False,
                                           help='Writes the encoded fingerprint of an archive to'
                                                ' the standard output.')
    analyze_parser.add_argument('archive',
                                type=pl.Path,
                                metavar='ARCHIVE',
                                help='Zip or jar archive.')
    analyze_parser.add_argument('--hash-algorithm',
                                required=False,
                                choices=fixed_length_algorithms(),
                                default=DEFAULT_HASH_ALGORITHM,
                                help='Hash algorithm used to fingerprint the member contents.')
    analyze_parser.add_argument('--workers',
                                type=_positive_int,
                                default=1,
                                help='Number of threads hashing archive members.')

    compare_parser = subparsers.add_parser('compare',
                                           parents=[common],
                                           add_help=False,
                                           help='Compares two encoded fingerprints.')
    compare_parser.add_argument('file1',
                                type=pl.Path,
                                metavar='FILE_1',
                                help='First encoded fingerprint.')
    compare_parser.add_argument('file2',
                                type=pl.Path,
                                metavar='FILE_2',
                                help='Second encoded fingerprint.')
    return parser


def run_analyze(args) -> int:
    fingerprinter = ArchiveFingerprinter(hash_algorithm=args.hash_algorithm, workers=args.workers)
    # The encoding is UTF-8 with LF line endings regardless of the console settings.
    if hasattr(sys.stdout, 'reconfigure'):
        sys.stdout.reconfigure(encoding='utf8', newline='\n')
    fingerprinter.analyze(args.archive, sys.stdout)
    return 0


def run_compare(args) -> int:
    for path in (args.file1, args.file2):
        if not path.exists():
            raise InputNotFound(str(path))

    report = ArchiveFingerprinter.compare(args.file1, args.file2)
    # Paths the console cannot display are escaped instead of aborting the report.
    if hasattr(sys.stdout, 'reconfigure'):
        sys.stdout.reconfigure(errors='backslashreplace')
    ReportPrinter(args.file1.name, args.file2.name, output=sys.stdout).print_report(report)
    return 0


def main(argv=None) -> int:
    """
    Main method that handles the command line interface of archive-fingerprint
    :param argv: Command line arguments without the program name, defaults to `sys.argv[1:]`.
    :return: Process exit code.
    """
    try:
        args = build_parser().parse_args(argv)
    except UsageError:
        sys.stderr.write(USAGE)
        return 2

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        if args.command == 'analyze':
            return run_analyze(args)
        return run_compare(args)
    except InputNotFound as error:
        print(f'File not found: {error.filename}', file=sys.stderr)
        return 1
    except FingerprintError as error:
        print(f'Error: {error}', file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
