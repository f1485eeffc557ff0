"""Tests for ChannelIndex lookups and blocklist matching."""

from functions.blocklist import find_blocked
from functions.index import ChannelIndex
from functions.models import Blocked, Category, Channel, Language


class TestChannelIndex:
    def setup_method(self):
        self.index = ChannelIndex.build(
            [Channel(id="CNN.us"), Channel(id="BBC.uk")],
            [Category("news", "News")],
            [Language("eng", "English")],
        )

    def test_lookups(self):
        assert self.index.channel("CNN.us").id == "CNN.us"
        assert self.index.category("news").name == "News"
        assert self.index.language("eng").name == "English"
        assert len(self.index) == 2

    def test_misses_return_none(self):
        assert self.index.channel("Nope.us") is None
        assert self.index.channel(None) is None
        assert self.index.category("sports") is None
        assert self.index.language("fra") is None
        assert self.index.has_channel("Nope.us") is False


class TestFindBlocked:
    BLOCKLIST = [Blocked("CNNInternational.us", "DMCA-123"), Blocked("Other.uk", "DMCA-9")]

    def test_derived_id_case_insensitive(self):
        assert find_blocked(self.BLOCKLIST, "Unrelated.us", "cnninternational.US").ref == "DMCA-123"

    def test_declared_id(self):
        assert find_blocked(self.BLOCKLIST, "other.UK", "").ref == "DMCA-9"

    def test_no_match(self):
        assert find_blocked(self.BLOCKLIST, "CNN.us", "CNN.us") is None

    def test_empty_ids(self):
        assert find_blocked(self.BLOCKLIST, None, "") is None
