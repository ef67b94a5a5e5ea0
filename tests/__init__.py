"""
Address book core unit tests
"""

import unittest
from .test_api import APITests, PublicBaseURLTests
from .test_cli import StandaloneCLITests
from .test_conditions import FingerprintTests, PreconditionTests, TagParsingTests
from .test_misc import LoggingHelperTests
from .test_store import StoreConcurrencyTests, StoreTests


TEST_CLASSES = [
    APITests,
    FingerprintTests,
    LoggingHelperTests,
    PreconditionTests,
    PublicBaseURLTests,
    StandaloneCLITests,
    StoreConcurrencyTests,
    StoreTests,
    TagParsingTests,
]


def get_suite() -> unittest.TestSuite:
    suite = unittest.TestSuite()
    for cls in TEST_CLASSES:
        for fixture in filter(lambda f: f.startswith("test_"), dir(cls)):
            suite.addTest(cls(fixture))
    return suite
