"""Tests for loading, saving and point access."""

import os

import orjson
import pytest
from pydantic import ValidationError

from common.exceptions import ExtensionError, PointIndexError, SchemaError
from funscript import get_point, load, save
from funscript.models import ActionPoint, FunscriptDocument
from tests.helpers import make_document


class TestLoad:

    def test_load_openfunscripter_file(self, ofs_data, write_funscript):
        document = load(write_funscript(ofs_data))

        assert document.metadata.duration == 2610
        assert document.actions[0].at == 218703

    def test_load_accepts_str_path(self, jfs_data, write_funscript):
        document = load(str(write_funscript(jfs_data)))

        assert document.last_position == 6388388382

    def test_missing_file_is_an_os_error(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load(tmp_path / "missing.funscript")

    def test_directory_is_an_os_error(self, tmp_path):
        with pytest.raises(OSError) as exc_info:
            load(tmp_path)
        assert not isinstance(exc_info.value, SchemaError)

    def test_bad_content_is_a_schema_error(self, tmp_path):
        path = tmp_path / "broken.funscript"
        path.write_bytes(b'{"actions": [{"pos": 1}]}')

        with pytest.raises(SchemaError) as exc_info:
            load(path)
        assert not isinstance(exc_info.value, OSError)


class TestSave:

    def test_save_then_load(self, jfs_data, write_funscript, tmp_path):
        document = load(write_funscript(jfs_data))
        document.bookmark = 100000
        out_path = tmp_path / "out" / "joyfunscripter.funscript"
        out_path.parent.mkdir()

        save(out_path, document)

        check = load(out_path)
        assert check.bookmark == 100000
        assert check == document

    def test_save_openfunscripter_round_trip(self, ofs_data, write_funscript, tmp_path):
        document = load(write_funscript(ofs_data))
        document.bookmark = 100000
        out_path = tmp_path / "openfunscripter_out.funscript"

        save(str(out_path), document)

        assert load(out_path) == document

    def test_save_overwrites_existing_file(self, tmp_path):
        out_path = tmp_path / "existing.funscript"
        out_path.write_text("old content")

        save(out_path, make_document([(0, 0), (100, 500)]))

        assert len(load(out_path).actions) == 2

    def test_save_leaves_no_temporary_files(self, tmp_path):
        save(tmp_path / "clean.funscript", FunscriptDocument())

        assert os.listdir(tmp_path) == ["clean.funscript"]

    def test_saved_file_is_pretty_printed_json(self, tmp_path):
        out_path = tmp_path / "pretty.funscript"
        save(out_path, make_document([(10, 20)]))

        content = out_path.read_bytes()
        assert content.startswith(b'{\n  "version"')
        assert orjson.loads(content)["actions"] == [{"pos": 10, "at": 20}]

    @pytest.mark.parametrize("name", [
        "script.json",
        "script.FUNSCRIPT",
        "script.funscript.bak",
        "script",
        "funscript",
    ])
    def test_rejects_other_extensions(self, tmp_path, name):
        target = tmp_path / name

        with pytest.raises(ExtensionError) as exc_info:
            save(target, FunscriptDocument())

        assert "invalid file extension" in str(exc_info.value)
        assert exc_info.value.path == str(target)
        assert not target.exists()
        assert os.listdir(tmp_path) == []

    def test_extension_error_is_an_os_error(self, tmp_path):
        with pytest.raises(OSError):
            save(tmp_path / "script.txt", FunscriptDocument())

    def test_rejected_save_leaves_existing_file_untouched(self, tmp_path):
        target = tmp_path / "keep.txt"
        target.write_text("original")

        with pytest.raises(ExtensionError):
            save(target, make_document([(1, 1)]))

        assert target.read_text() == "original"

    def test_missing_directory_is_an_os_error(self, tmp_path):
        target = tmp_path / "nope" / "script.funscript"

        with pytest.raises(FileNotFoundError):
            save(target, FunscriptDocument())
        assert not target.parent.exists()

    def test_unencodable_document_does_not_touch_destination(self, tmp_path):
        target = tmp_path / "script.funscript"
        target.write_text("original")
        document = FunscriptDocument()
        # in-place list edits bypass validation
        document.clips.append(2 ** 70)

        with pytest.raises(SchemaError):
            save(target, document)

        assert target.read_text() == "original"
        assert os.listdir(tmp_path) == ["script.funscript"]


class TestGetPoint:

    def test_get_and_mutate_first_point(self, ofs_data, write_funscript):
        document = load(write_funscript(ofs_data))

        point = get_point(document, 0)
        assert point.at == 218703
        point.at = 12345678

        assert document.actions[0].at == 12345678

    def test_mutation_is_saved(self, tmp_path):
        document = make_document([(0, 0), (100, 500)])
        get_point(document, 1).pos = 42
        save(tmp_path / "edited.funscript", document)

        assert load(tmp_path / "edited.funscript").actions[1] == ActionPoint(pos=42, at=500)

    def test_document_method(self):
        document = make_document([(0, 0), (100, 500)])

        assert document.get_point(1) is document.actions[1]

    def test_raw_actions_are_not_affected(self):
        document = make_document([(0, 0), (100, 500)])

        get_point(document, 0).pos = 77

        assert document.raw_actions[0].pos == 0

    def test_index_equal_to_length_fails(self):
        document = make_document([(0, 0), (100, 500)])

        with pytest.raises(PointIndexError) as exc_info:
            get_point(document, len(document.actions))

        assert exc_info.value.index == 2
        assert exc_info.value.operation == "get"
        assert str(exc_info.value) == "failed to get point at index 2"

    def test_empty_document(self):
        with pytest.raises(PointIndexError) as exc_info:
            get_point(FunscriptDocument(), 0)
        assert exc_info.value.index == 0

    def test_negative_index_fails(self):
        document = make_document([(0, 0)])

        with pytest.raises(PointIndexError) as exc_info:
            document.get_point(-1)
        assert exc_info.value.index == -1

    def test_point_index_error_is_an_index_error(self):
        with pytest.raises(IndexError):
            get_point(FunscriptDocument(), 5)

    def test_assignment_is_validated(self):
        document = make_document([(0, 0)])
        point = get_point(document, 0)

        with pytest.raises(ValidationError):
            point.at = 2 ** 31
        with pytest.raises(ValidationError):
            point.pos = "50"

        assert document.actions[0] == ActionPoint(pos=0, at=0)
