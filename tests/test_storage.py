"""Tests for reference data loading, record validation and the stream database."""

import json

import pytest

from functions.models import Channel, DataError, Stream
from functions.storage import StreamDatabase, load_json_records, load_reference_data


class TestRecords:
    def test_channel_from_dict(self):
        channel = Channel.from_dict({"id": "CNN.us", "categories": ["news"], "is_nsfw": False})
        assert channel.id == "CNN.us"
        assert channel.categories == ["news"]
        assert channel.logo is None
        assert channel.broadcast_area == []

    def test_channel_without_id(self):
        with pytest.raises(DataError, match="channel: missing required field 'id'"):
            Channel.from_dict({"name": "No id"})

    def test_list_field_type_checked(self):
        with pytest.raises(DataError, match="categories"):
            Channel.from_dict({"id": "X.us", "categories": "news"})

    def test_stream_requires_url(self):
        with pytest.raises(DataError, match="url"):
            Stream.from_dict({"name": "A"})

    def test_stream_bad_line(self):
        with pytest.raises(DataError, match="line"):
            Stream.from_dict({"url": "http://a", "line": "abc"})


class TestLoadReferenceData:
    def test_loads_everything(self, data_dir):
        data = load_reference_data(data_dir)
        assert [c.id for c in data.channels] == ["CNN.us", "France24.fr", "Adult.us"]
        assert data.regions[0].countries == ["FR"]
        assert data.subdivisions[0].country == "US"
        assert data.blocklist[0].ref == "DMCA-123"

    def test_missing_optional_file_is_empty(self, data_dir):
        (data_dir / "blocklist.json").unlink()
        assert load_reference_data(data_dir).blocklist == []

    def test_missing_channels_file(self, data_dir):
        (data_dir / "channels.json").unlink()
        with pytest.raises(FileNotFoundError):
            load_reference_data(data_dir)

    def test_duplicate_channel_ids(self, data_dir):
        (data_dir / "channels.json").write_text(json.dumps([{"id": "A.us"}, {"id": "A.us"}]))
        with pytest.raises(DataError, match="duplicate channel id 'A.us'"):
            load_reference_data(data_dir)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "channels.json"
        path.write_text('{"id": "A.us"}')
        with pytest.raises(DataError, match="expected a list"):
            load_json_records(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "channels.json"
        path.write_text("[{")
        with pytest.raises(DataError, match="invalid JSON"):
            load_json_records(path)


class TestStreamDatabase:
    def test_insert_and_find_all(self, tmp_path):
        db = StreamDatabase(tmp_path / "db" / "streams.db")
        streams = [
            Stream(name="B", url="http://b", channel="B.us", filepath="us.m3u", line=4),
            Stream(name="A", url="http://a", user_agent="UA/1", filepath="us.m3u", line=2),
        ]
        assert db.insert(streams) == 2
        assert db.count() == 2
        assert db.find_all() == streams

    def test_clear(self, tmp_path):
        db = StreamDatabase(tmp_path / "streams.db")
        db.insert([Stream(name="A", url="http://a")])
        db.clear()
        assert db.count() == 0
        assert db.find_all() == []
