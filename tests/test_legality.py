import unittest

from arbpath.services.legality import LegalityClassifier, is_legal


class LegalityClassifierTests(unittest.TestCase):
    def test_reference_pair_wins_over_deny_list(self) -> None:
        self.assertTrue(is_legal("BTC", "INR", frozenset({"BTCINR"})))
        self.assertFalse(is_legal("INR", "BTC", frozenset({"BTCINR"})))

    def test_deny_list(self) -> None:
        for src, dst in [("USD", "RUB"), ("RUB", "USD"), ("AED", "XRP"), ("ETH", "INR")]:
            self.assertFalse(is_legal(src, dst, frozenset()), f"{src}->{dst}")

    def test_default_allow_for_known_currencies(self) -> None:
        self.assertTrue(is_legal("USD", "EUR", frozenset()))
        self.assertTrue(is_legal("BTC", "USDT", frozenset()))

    def test_unknown_currency_is_illegal(self) -> None:
        self.assertFalse(is_legal("USD", "XYZ", frozenset()))
        self.assertFalse(is_legal("RUB", "EUR", frozenset()))

    def test_custom_universe_and_deny_list(self) -> None:
        clf = LegalityClassifier(universe=["usd", "rub", "eur"], restricted=[("eur", "rub")])

        self.assertTrue(clf.is_legal("USD", "RUB", frozenset()))
        self.assertFalse(clf.is_legal("EUR", "RUB", frozenset()))
        self.assertTrue(clf.is_legal("EUR", "RUB", frozenset({"EURRUB"})))


if __name__ == "__main__":
    unittest.main()
