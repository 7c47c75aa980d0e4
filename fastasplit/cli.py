import argparse
import logging
import sys

from fastasplit import __version__

log = logging.getLogger(__name__)

PROG = 'fastasplit'


def _positive_float(value):
    try:
        number = float(value)
    except ValueError:
        number = None
    if number is None or not number > 0:
        raise argparse.ArgumentTypeError('the split size has to be a float or integer number greater than zero')
    return number


def _positive_int(value):
    try:
        number = int(value)
    except ValueError:
        number = None
    if number is None or number <= 0:
        raise argparse.ArgumentTypeError('the -n value has to be an integer greater than zero')
    return number


def exit_with_error(message, status=1):
    """
    Report a fatal error on stderr and stop.

    Handled errors exit with a non-zero status so calling pipelines notice them.

    :param message: Error description, without trailing period.
    :param status: Exit status.
    """
    sys.stderr.write("ERROR: {}.\n\nTry '{} -h' for more information.\nExit program.\n".format(message, PROG))
    sys.exit(status)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors like every other fatal error."""

    def error(self, message):
        exit_with_error(message)


class _ManualAction(argparse.Action):
    """Print the help followed by the full documentation, then exit."""

    def __init__(self, option_strings, dest=argparse.SUPPRESS, default=argparse.SUPPRESS, manual=None, help=None):
        super(_ManualAction, self).__init__(option_strings=option_strings, dest=dest, default=default, nargs=0,
                                            help=help)
        self.manual = manual

    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help()
        if self.manual:
            sys.stdout.write('\n' + self.manual.strip() + '\n')
        parser.exit()


def _parse_args_and_log(parser, argv, logger):
    """
    Parse arguments, set verbosity and log their values.

    :param parser: ArgumentParser.
    :param argv: None or list of arguments.
    :param logger: Logger.
    :return:
    """
    args = parser.parse_args(argv)
    logging.getLogger('fastasplit').setLevel(logging.INFO if args.verbose else logging.WARNING)
    if logger:
        for arg, value in sorted(vars(args).items()):
            logger.info("Command line argument %s: %r", arg, value)
    return args


def split_fasta_parser(argv=None, logger=log, manual=None):
    parser = _ArgumentParser(prog=PROG, description='Splits a FASTA file into smaller chunks.', add_help=False)
    parser.add_argument('-h', '-help', action='help', help='Print the help message; ignore other arguments.')
    parser.add_argument('-man', action=_ManualAction, manual=manual,
                        help='Print the full documentation; ignore other arguments.')
    parser.add_argument('-version', action='version', version='{}-{}'.format(PROG, __version__),
                        help='Print program version; ignore other arguments.')
    parser.add_argument('-verbose', action='store_true', help='Prints status and info messages during processing.')
    parser.add_argument('-i', type=str, metavar='<file>', required=True, help='Input file in FASTA format.')
    _size_group = parser.add_mutually_exclusive_group(required=True)
    _size_group.add_argument('-s', type=_positive_float, metavar='<float>',
                             help='Size of the FASTA file chunks in MB (MegaByte). Cannot be used with -n.')
    _size_group.add_argument('-n', type=_positive_int, metavar='<integer>',
                             help='Number of chunks the FASTA file should be split into. Cannot be used with -s and '
                                  'has to be greater than zero.')
    return _parse_args_and_log(parser, argv, logger)
