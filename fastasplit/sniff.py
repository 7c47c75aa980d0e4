"""
Guess the format of a sequence file from its first few lines.

FASTA and QUAL files share the same `>` header syntax and only differ in their body (residues versus numeric quality
values), while FASTQ records start with `@` and carry a `+` separator line. Each format is tracked by its own small
candidate state machine; the candidates see the same lines independently and the winner is picked once scanning ends.
"""
import enum
import logging
import re

from Bio.Data import IUPACData

from fastasplit.config import defaults
from fastasplit.utils import open_normalized

log = logging.getLogger(__name__)

_NUCLEOTIDE_LETTERS = ''.join(sorted(set(IUPACData.ambiguous_dna_letters + IUPACData.ambiguous_rna_letters + 'X')))
_PROTEIN_LETTERS = ''.join(sorted(set(IUPACData.protein_letters + 'BOUXZ')))

NUCLEOTIDE_RE = re.compile('[{}-]+'.format(_NUCLEOTIDE_LETTERS), re.IGNORECASE)
PROTEIN_RE = re.compile(r'[{}*-]+'.format(_PROTEIN_LETTERS), re.IGNORECASE)
FASTA_HEADER_RE = re.compile(r'>')
QUAL_VALUES_RE = re.compile(r'\s*\d+')
FASTQ_HEADER_RE = re.compile(r'@(\S+)')
FASTQ_SEPARATOR_RE = re.compile(r'\+(\S*)')
FASTQ_EMPTY_SEPARATOR_RE = re.compile(r'\+\s*$')


class SequenceFormat(enum.Enum):
    FASTA = 'fasta'
    FASTQ = 'fastq'
    QUAL = 'qual'
    UNKNOWN = 'unknown'


# Candidate states
CLOSED, OPEN, SEQUENCE, CONFIRMED = range(4)


def _is_sequence(line):
    return bool(PROTEIN_RE.match(line) or NUCLEOTIDE_RE.match(line))


class _Candidate(object):
    """Base class for a format candidate advanced one line at a time."""

    def __init__(self):
        self.state = CLOSED

    @property
    def confirmed(self):
        return self.state == CONFIRMED

    def feed(self, line):
        if not self.confirmed:
            self.advance(line)

    def advance(self, line):
        raise NotImplementedError


class _FastaCandidate(_Candidate):
    """A `>` header immediately followed by sequence residues."""

    def advance(self, line):
        if self.state == OPEN and _is_sequence(line):
            self.state = CONFIRMED
        elif FASTA_HEADER_RE.match(line):
            self.state = OPEN
        else:
            self.state = CLOSED


class _QualCandidate(_Candidate):
    """A `>` header immediately followed by integer quality values."""

    def advance(self, line):
        if self.state == OPEN and QUAL_VALUES_RE.match(line):
            self.state = CONFIRMED
        elif FASTA_HEADER_RE.match(line):
            self.state = OPEN
        else:
            self.state = CLOSED


class _FastqCandidate(_Candidate):
    """An `@id` header, a sequence line and a `+` (or `+id`) separator."""

    def __init__(self):
        super(_FastqCandidate, self).__init__()
        self.record_id = None

    def advance(self, line):
        if self.state == OPEN and _is_sequence(line):
            self.state = SEQUENCE
            return
        if self.state == SEQUENCE:
            separator = FASTQ_SEPARATOR_RE.match(line)
            if separator and (separator.group(1) == self.record_id or FASTQ_EMPTY_SEPARATOR_RE.match(line)):
                self.state = CONFIRMED
                return
        header = FASTQ_HEADER_RE.match(line)
        if header:
            self.record_id = header.group(1)
            self.state = OPEN
        else:
            self.state = CLOSED
            self.record_id = None


def detect(stream, max_lines=None):
    """
    Classify a stream of lines as FASTA, QUAL, FASTQ or unknown.

    Lines ending in `\\r\\n` or a lone `\\r` are split like `\\n` lines. Blank lines are ignored and at most
    `max_lines` non-empty lines are examined. When several candidates are confirmed, FASTA wins over QUAL, which
    wins over FASTQ.

    :param stream: Iterable of text, normally the lines from `fastasplit.utils.open_normalized`.
    :param max_lines: Number of non-empty lines to inspect, defaults to the configured value.
    :return: SequenceFormat
    """
    if max_lines is None:
        max_lines = defaults.max_lines
    fasta, qual, fastq = _FastaCandidate(), _QualCandidate(), _FastqCandidate()

    seen = 0
    for line in (part for text in stream for part in text.splitlines()):
        if not line:
            continue
        if seen == max_lines:
            break
        seen += 1
        for candidate in (fasta, qual, fastq):
            candidate.feed(line)
        if fasta.confirmed:
            break

    if fasta.confirmed:
        return SequenceFormat.FASTA
    if qual.confirmed:
        return SequenceFormat.QUAL
    if fastq.confirmed:
        return SequenceFormat.FASTQ
    return SequenceFormat.UNKNOWN


def detect_file_format(path_to_file):
    """
    Sniff the format of a file on disk.

    :param path_to_file: Path to the sequence file.
    :return: SequenceFormat
    """
    with open_normalized(path_to_file) as lines:
        file_format = detect(lines)
    log.info('Detected %s format for %s', file_format.value.upper(), path_to_file)
    return file_format
