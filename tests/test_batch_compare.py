"""Tests for comparing one cached reference against a folder of screenshots."""

import pytest

from visual_diff import VisualDiffOptions, DecodeError
from visual_diff.pipeline.batch_compare import compare_against_reference, diff_name_for, summarize_batch


class TestCompareAgainstReference:
    def test_entries_in_sorted_order(self, image_dir, white_png):
        entries = compare_against_reference(white_png, image_dir)
        assert [e.path.name for e in entries] == ["broken.png", "different.png", "same.png"]

    def test_bad_file_does_not_stop_batch(self, image_dir, white_png):
        broken, different, same = compare_against_reference(white_png, image_dir, max_workers=1)
        assert broken.failed
        assert broken.result is None
        assert different.result.difference_percentage == 100
        assert same.result.is_match

    def test_threshold_applies_to_every_entry(self, image_dir, white_png):
        entries = compare_against_reference(white_png, image_dir, options=VisualDiffOptions(threshold=100))
        assert summarize_batch(entries) == {"total": 3, "matched": 2, "mismatched": 0, "failed": 1}

    def test_saves_diffs(self, image_dir, white_png, tmp_path):
        out = tmp_path / "diffs"
        entries = compare_against_reference(white_png, image_dir, output_dir=out)
        saved = {e.path.name: e.diff_path for e in entries if e.diff_path}
        assert set(saved) == {"different.png", "same.png"}
        assert saved["same.png"] == (out / "same-diff.png").resolve()
        assert saved["same.png"].is_file()

    def test_bad_reference_aborts(self, image_dir):
        with pytest.raises(DecodeError):
            compare_against_reference(b"", image_dir)

    def test_recursive(self, image_dir, white_png):
        nested = image_dir / "nested"
        nested.mkdir()
        (nested / "deep.png").write_bytes(white_png)
        flat = compare_against_reference(white_png, image_dir)
        deep = compare_against_reference(white_png, image_dir, recursive=True)
        assert len(deep) == len(flat) + 1

    def test_to_dict(self, image_dir, white_png):
        entries = compare_against_reference(white_png, image_dir)
        as_dicts = [e.to_dict() for e in entries]
        assert as_dicts[0]["error"]
        assert as_dicts[2]["result"]["is_match"] is True

    def test_recursive_diffs_with_shared_stem_stay_apart(self, tmp_path, white_png, black_png):
        folder = tmp_path / "shots"
        (folder / "nested").mkdir(parents=True)
        (folder / "page.png").write_bytes(white_png)
        (folder / "nested" / "page.png").write_bytes(black_png)
        out = tmp_path / "diffs"

        nested, top = compare_against_reference(white_png, folder, output_dir=out, recursive=True)

        assert top.diff_path == (out / "page-diff.png").resolve()
        assert nested.diff_path == (out / "nested__page-diff.png").resolve()
        assert top.diff_path.is_file() and nested.diff_path.is_file()
        assert top.result.is_match and not nested.result.is_match


class TestDiffNameFor:
    def test_top_level(self, tmp_path):
        assert diff_name_for(tmp_path / "home.png", tmp_path) == "home-diff.png"

    def test_sub_folders_are_flattened(self, tmp_path):
        assert diff_name_for(tmp_path / "a" / "b" / "home.jpg", tmp_path) == "a__b__home-diff.png"
