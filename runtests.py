#!/usr/bin/env python
import sys
import unittest


def run(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    cov = None
    if '--coverage' in args:
        import coverage
        args.remove('--coverage')
        cov = coverage.Coverage(source=['couchconnector'])
        cov.start()
    loader = unittest.TestLoader()
    if args:
        suite = loader.loadTestsFromNames(args)
    else:
        suite = loader.discover('tests', top_level_dir='.')
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    if cov:
        cov.stop()
        cov.report()
    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run())
