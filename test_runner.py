import sys
import unittest


def run_tests(pattern="test_*.py", verbosity=1):
    """
    Discover and run the SIRAS test suite in the 'tests' directory.

    Returns:
        bool: True if every test passed.
    """
    loader = unittest.TestLoader()
    suite = loader.discover("tests", pattern=pattern)

    runner = unittest.TextTestRunner(buffer=True, verbosity=verbosity)
    return runner.run(suite).wasSuccessful()


if __name__ == "__main__":
    pattern = sys.argv[1] if len(sys.argv) > 1 else "test_*.py"
    sys.exit(0 if run_tests(pattern, verbosity=2) else 1)
