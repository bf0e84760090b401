import importlib
import os
import unittest
from unittest import mock

from arbpath.config import settings


class SettingsTests(unittest.TestCase):
    def tearDown(self) -> None:
        importlib.reload(settings)

    def test_fee_is_a_fixed_constant(self) -> None:
        with mock.patch.dict(os.environ, {"ARBPATH_FEE": "0.5"}):
            importlib.reload(settings)

        self.assertEqual(settings.FEE, 0.001)

    def test_universe_is_fiats_then_cryptos(self) -> None:
        self.assertEqual(settings.ALL_CURRENCIES, settings.FIATS + settings.CRYPTOS)
        self.assertTrue(all(c == c.upper() for c in settings.ALL_CURRENCIES))


if __name__ == "__main__":
    unittest.main()
