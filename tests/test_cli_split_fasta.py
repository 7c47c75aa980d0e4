import filecmp
import io
import logging
import os
import shutil
import tempfile
from unittest import TestCase, mock

from fastasplit import __version__
from fastasplit.cli import split_fasta_parser
from fastasplit.split_fasta import main


class TestCliSplitFasta(TestCase):
    """Test some aspects of the `fastasplit` CLI."""

    def setUp(self):
        self.options = ['n', 'verbose']
        self.defaults = [None, False]

    def tearDown(self):
        logging.getLogger('fastasplit').setLevel(logging.NOTSET)

    def _parse_error(self, argv):
        with mock.patch('sys.stderr', new_callable=io.StringIO) as stderr:
            with self.assertRaises(SystemExit) as cm:
                split_fasta_parser(argv)
        self.assertEqual(cm.exception.code, 1)
        self.assertTrue(stderr.getvalue().startswith('ERROR: '))
        return stderr.getvalue()

    def test_input(self):
        args = split_fasta_parser('-i file.fasta -n 3'.split())
        self.assertEqual(args.i, 'file.fasta')
        self.assertEqual(args.n, 3)

    def test_defaults(self):
        """Check defaults are as expected."""
        args = split_fasta_parser('-i file.fasta -s 2'.split())
        mismatched = [k for k, v in zip(self.options, self.defaults) if not getattr(args, k) == v]
        message = 'Argument defaults are broken. Incorrect default(s) for {}'.format(mismatched)
        self.assertFalse(mismatched, message)
        self.assertEqual(args.s, 2.0)

    def test_verbose(self):
        args = split_fasta_parser('-verbose -i file.fasta -s 0.5'.split())
        self.assertTrue(args.verbose)
        self.assertEqual(logging.getLogger('fastasplit').level, logging.INFO)

    def test_quiet(self):
        split_fasta_parser('-i file.fasta -s 0.5'.split())
        self.assertEqual(logging.getLogger('fastasplit').level, logging.WARNING)

    def test_both_selectors(self):
        self.assertIn('not allowed with', self._parse_error('-i file.fasta -s 1 -n 2'.split()))

    def test_no_selector(self):
        self._parse_error('-i file.fasta'.split())

    def test_missing_input(self):
        self._parse_error('-n 2'.split())

    def test_bad_values(self):
        self._parse_error('-i file.fasta -n 0'.split())
        self._parse_error('-i file.fasta -n 2.5'.split())
        self._parse_error('-i file.fasta -s -1'.split())
        self._parse_error('-i file.fasta -s big'.split())

    def test_version(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            with self.assertRaises(SystemExit) as cm:
                split_fasta_parser(['-version'])
        self.assertEqual(cm.exception.code, 0)
        self.assertEqual(stdout.getvalue().strip(), 'fastasplit-{}'.format(__version__))

    def test_manual(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            with self.assertRaises(SystemExit) as cm:
                split_fasta_parser(['-man'], manual='Full documentation.')
        self.assertEqual(cm.exception.code, 0)
        self.assertIn('-verbose', stdout.getvalue())
        self.assertTrue(stdout.getvalue().rstrip().endswith('Full documentation.'))

    def test_help(self):
        with mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            with self.assertRaises(SystemExit) as cm:
                split_fasta_parser(['-help'])
        self.assertEqual(cm.exception.code, 0)
        self.assertIn('Splits a FASTA file into smaller chunks.', stdout.getvalue())


class TestMain(TestCase):
    """Run the `fastasplit` entry point end to end."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.fasta = os.path.join(self.test_dir, 'input.fasta')
        with open(self.fasta, 'w') as f:
            f.write(''.join('>seq{}\nMKVLAAGIVG\n'.format(i) for i in range(1, 11)))

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)
        logging.getLogger('fastasplit').setLevel(logging.NOTSET)

    def _outputs(self):
        return sorted(f for f in os.listdir(self.test_dir) if f != 'input.fasta')

    def _main_error(self, argv):
        with mock.patch('sys.stderr', new_callable=io.StringIO) as stderr:
            with self.assertRaises(SystemExit) as cm:
                main(argv)
        self.assertEqual(cm.exception.code, 1)
        self.assertEqual(self._outputs(), [])
        return stderr.getvalue()

    def test_split_by_count(self):
        main(['-i', self.fasta, '-n', '4'])
        self.assertEqual(self._outputs(), ['input.fasta_c{}.fasta'.format(i) for i in range(1, 5)])

    def test_split_by_size(self):
        main(['-i', self.fasta, '-s', '10'])
        self.assertEqual(self._outputs(), ['input.fasta_c1.fasta'])

    def test_missing_file(self):
        message = self._main_error(['-i', os.path.join(self.test_dir, 'missing.fasta'), '-n', '2'])
        self.assertIn('ERROR: could not find input file', message)

    def test_not_fasta(self):
        with open(self.fasta, 'w') as f:
            f.write('>seq1\n10 20 30\n')
        message = self._main_error(['-i', self.fasta, '-n', '2'])
        self.assertIn('ERROR: input file for -i is in QUAL format not in FASTA format.', message)

    def test_both_selectors(self):
        self._main_error(['-i', self.fasta, '-n', '2', '-s', '1'])

    def test_io_error(self):
        os.makedirs(os.path.join(self.test_dir, 'input.fasta_c1.fasta'))
        with mock.patch('sys.stderr', new_callable=io.StringIO) as stderr:
            with self.assertRaises(SystemExit) as cm:
                main(['-i', self.fasta, '-n', '2'])
        self.assertEqual(cm.exception.code, 1)
        self.assertTrue(stderr.getvalue().startswith('ERROR: '))

    def test_verbose_same_output(self):
        """Progress and status output never change the chunk files."""
        quiet_dir = os.path.join(self.test_dir, 'quiet')
        verbose_dir = os.path.join(self.test_dir, 'verbose')
        for d in (quiet_dir, verbose_dir):
            os.makedirs(d)
            shutil.copy(self.fasta, d)
        main(['-i', os.path.join(quiet_dir, 'input.fasta'), '-n', '3'])
        with mock.patch('sys.stderr', new_callable=io.StringIO):
            main(['-verbose', '-i', os.path.join(verbose_dir, 'input.fasta'), '-n', '3'])

        chunks = ['input.fasta_c{}.fasta'.format(i) for i in range(1, 4)]
        self.assertEqual(sorted(os.listdir(verbose_dir)), ['input.fasta'] + chunks)
        match, mismatch, errors = filecmp.cmpfiles(quiet_dir, verbose_dir, chunks, shallow=False)
        self.assertEqual(match, chunks)
        self.assertFalse(mismatch or errors)
