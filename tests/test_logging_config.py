import logging
import unittest

from cgpa_analyser.logging_config import setup_logging


class SetupLoggingTests(unittest.TestCase):
    def tearDown(self):
        logging.getLogger("cgpa_analyser").handlers.clear()

    def test_repeated_setup_keeps_one_handler(self):
        setup_logging(logging.DEBUG)
        logger = setup_logging(logging.WARNING)
        self.assertEqual(logger.name, "cgpa_analyser")
        self.assertEqual(logger.level, logging.WARNING)
        self.assertEqual(len(logger.handlers), 1)


if __name__ == "__main__":
    unittest.main()
