"""Tests for utils module"""

import pytest

from settingsform.errors import SchemaError
from settingsform.utils import is_checked, read_source, same_choice


class TestIsChecked:
    """Tests for is_checked function"""

    @pytest.mark.parametrize("value", ["", "0", None, False, 0, [], {}])
    def test_unchecked_values(self, value):
        assert is_checked(value) is False

    @pytest.mark.parametrize("value", ["1", "yes", True, 1, ["a"]])
    def test_checked_values(self, value):
        assert is_checked(value) is True


class TestSameChoice:
    """Tests for same_choice function"""

    def test_compares_as_strings(self):
        assert same_choice(1, "1")
        assert same_choice("red", "red")
        assert not same_choice("red", "blue")

    def test_bool_compares_as_int(self):
        assert same_choice("1", True)
        assert same_choice("0", False)

    def test_missing_or_collection_never_matches(self):
        assert not same_choice("", None)
        assert not same_choice("a", ["a"])


class TestReadSource:
    """Tests for read_source function"""

    def test_reads_toml(self, tmp_path):
        path = tmp_path / "demo.toml"
        path.write_text('[[sections]]\nsection_id = "general"\n', encoding="utf-8")

        assert read_source(path) == {"sections": [{"section_id": "general"}]}

    def test_reads_json_list(self, tmp_path):
        path = tmp_path / "demo.json"
        path.write_text('[{"section_id": "general"}]', encoding="utf-8")

        assert read_source(str(path)) == [{"section_id": "general"}]

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaError, match="not found"):
            read_source(tmp_path / "missing.toml")

    def test_invalid_content(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SchemaError, match="Invalid settings file"):
            read_source(path)

    def test_unsupported_suffix(self, tmp_path):
        path = tmp_path / "demo.yaml"
        path.write_text("sections: []", encoding="utf-8")

        with pytest.raises(SchemaError, match="Unsupported settings file type"):
            read_source(path)
