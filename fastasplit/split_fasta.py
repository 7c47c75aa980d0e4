"""
Split a FASTA file into smaller chunks.

Records are never split between files: chunk boundaries only ever fall before a `>` header line. The number of
records per chunk is derived either from a target number of chunks (`-n`) or from an approximate chunk size in
megabytes (`-s`).

Examples:

    fastasplit -verbose -i file.fasta -s 2     # chunks of 2MB
    fastasplit -verbose -i file.fasta -n 10    # 10 chunks

Each chunk is written next to the input as <input>_c<k>.fasta, with k starting at 1. Line endings are normalized to
`\\n` and blank lines are dropped on the way through.

The size based estimate uses int(0.999999 + file_size / chunk_size) chunks. This rounds up in general but rounds
down when the ratio sits within 1e-6 above an integer (a 2MB file split with -s 1 gives two chunks, a file of
2.0000005MB also gives two). The arithmetic is kept as is so existing pipelines see the same chunk counts.

Any lines before the first `>` header are copied to the start of the first chunk, so that chunk does not begin
with a header. The format check accepts such files as long as a header and its sequence follow within the first
three lines.

Interrupting a run may leave the last chunk partially written.
"""
import collections
import logging
import math
import os

import tqdm

from fastasplit import cli
from fastasplit.config import defaults
from fastasplit.sniff import SequenceFormat, detect_file_format
from fastasplit.utils import ValidationError, open_normalized

log = logging.getLogger(__name__)

# Added before truncation to round the chunk estimate up.
ROUNDING_GUARD = 0.999999

SplitRequest = collections.namedtuple('SplitRequest', ['path', 'n_chunks', 'chunk_size'])


class ChunkPlan(collections.namedtuple('ChunkPlan', ['n_records', 'records_per_chunk'])):
    __slots__ = ()

    @property
    def n_files(self):
        """Number of chunk files the plan produces."""
        return max(1, int(math.ceil(self.n_records / float(self.records_per_chunk))))


class OutputChunk(object):
    """An open chunk file and the number of records written to it."""

    def __init__(self, input_path, index):
        self.index = index
        self.path = chunk_path(input_path, index)
        self.records = 0
        log.info('Writing chunk %s', self.path)
        self.handle = open(self.path, 'w', encoding=defaults.encoding, newline='\n')

    def write(self, line):
        self.handle.write(line)

    def close(self):
        self.handle.close()


def chunk_path(input_path, index):
    """
    Path of the `index`-th (1-based) chunk of `input_path`.

    :param input_path:
    :param index:
    :return:
    """
    return defaults.chunk_template.format(path=input_path, index=index)


def build_request(path, n_chunks=None, chunk_size=None):
    """
    Validate user input and build a SplitRequest.

    The input must exist and be in FASTA format, and exactly one of `n_chunks` or `chunk_size` must be given.

    :param path: Path to the input FASTA file.
    :param n_chunks: Number of chunks to produce.
    :param chunk_size: Approximate chunk size in megabytes.
    :return: SplitRequest
    """
    if not path:
        raise ValidationError('you did not specify an input file containing the query sequences')
    if not os.path.isfile(path):
        raise ValidationError('could not find input file "{}"'.format(path))

    if n_chunks is not None and chunk_size is not None:
        raise ValidationError('the options -s and -n cannot be used together')
    if n_chunks is None and chunk_size is None:
        raise ValidationError('either option -s or option -n has to be specified')
    if chunk_size is not None:
        if isinstance(chunk_size, bool) or not isinstance(chunk_size, (int, float)) or not chunk_size > 0:
            raise ValidationError('the split size has to be a float or integer number greater than zero')
    if n_chunks is not None:
        if isinstance(n_chunks, bool) or not isinstance(n_chunks, int) or n_chunks <= 0:
            raise ValidationError('the -n value has to be an integer greater than zero')

    log.info('Checking input file')
    file_format = detect_file_format(path)
    if file_format is not SequenceFormat.FASTA:
        raise ValidationError('input file for -i is in {} format not in FASTA format'.format(
            file_format.value.upper()))

    return SplitRequest(path, n_chunks, chunk_size)


def count_records(lines):
    """Count `>` header lines."""
    return sum(1 for line in lines if line.startswith('>'))


def plan_chunks(n_records, request, file_size):
    """
    Work out how many records go into each chunk.

    One record is added to the plain quotient so that an uneven split does not leave a near empty trailing chunk.

    :param n_records: Total number of records in the input.
    :param request: SplitRequest
    :param file_size: Size of the input in bytes, used when splitting by size.
    :return: ChunkPlan
    """
    if request.n_chunks is not None:
        records_per_chunk = n_records // request.n_chunks
    else:
        estimated_chunks = int(ROUNDING_GUARD + file_size / (request.chunk_size * defaults.megabyte))
        # Inputs far smaller than one chunk estimate zero chunks
        estimated_chunks = max(estimated_chunks, 1)
        records_per_chunk = n_records // estimated_chunks
    records_per_chunk += 1
    return ChunkPlan(n_records, records_per_chunk)


def split(request, progress=False):
    """
    Write the records of the request's input into consecutive chunk files.

    The input is read twice: once to count the records, which the chunk arithmetic needs up front, and once to
    copy the records out. The first chunk is opened before any record is read, so an input without records still
    produces one (empty) chunk.

    :param request: SplitRequest
    :param progress: Show a progress bar on stderr.
    :return: List of chunk file paths, in order.
    """
    with open_normalized(request.path) as lines:
        n_records = count_records(lines)
    log.info('Counted %d records in %s', n_records, request.path)

    plan = plan_chunks(n_records, request, os.path.getsize(request.path))
    log.info('Split file into %d chunks of at most %d records', plan.n_files, plan.records_per_chunk)

    paths = []
    chunk = OutputChunk(request.path, 1)
    paths.append(chunk.path)
    try:
        with open_normalized(request.path) as lines, \
                tqdm.tqdm(total=n_records, desc='Splitting', unit='seq', disable=not progress) as bar:
            for line in lines:
                if line.startswith('>'):
                    chunk.records += 1
                    bar.update(1)
                    if chunk.records > plan.records_per_chunk:
                        chunk.close()
                        chunk = OutputChunk(request.path, chunk.index + 1)
                        paths.append(chunk.path)
                        chunk.records = 1
                chunk.write(line)
    finally:
        chunk.close()

    log.info('DONE.')
    return paths


def main(argv=None):
    args = cli.split_fasta_parser(argv, manual=__doc__)
    try:
        request = build_request(args.i, n_chunks=args.n, chunk_size=args.s)
        split(request, progress=args.verbose)
    except (ValidationError, OSError) as e:
        cli.exit_with_error(str(e))


if __name__ == '__main__':
    main()
