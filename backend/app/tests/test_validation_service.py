"""
Unit tests for mall dataset validation.
"""

import json

import pytest

from app.services.validation_service import count_stores, validate_dataset
from scripts.validate_data import main as validate_main


@pytest.mark.unit
class TestValidateDataset:
    """Test dataset issue reporting."""

    def test_valid_dataset_has_no_issues(self, sample_malls):
        """Test that the sample dataset is clean."""
        assert validate_dataset(sample_malls) == []

    def test_root_must_be_list(self):
        """Test that a non-list document is reported."""
        assert validate_dataset({"malls": []}) == ["Document root must be a list of malls"]

    def test_missing_and_duplicate_mall_ids(self, sample_malls):
        """Test mall id checks."""
        sample_malls[1]["id"] = 1
        del sample_malls[0]["id"]

        issues = validate_dataset(sample_malls)

        assert "Mall #1 (City Center Mall): Missing mall id" in issues
        # First mall lost its id, so id 1 is only seen once
        assert not any("Duplicate mall id" in issue for issue in issues)

        sample_malls[0]["id"] = 1
        assert "Mall #2 (Doha Festival City): Duplicate mall id" in validate_dataset(sample_malls)

    def test_mall_coordinates_out_of_range(self, sample_malls):
        """Test Qatar bounding box checks on malls."""
        sample_malls[0]["latitude"] = 30.1
        sample_malls[0]["longitude"] = 49.0

        issues = validate_dataset(sample_malls)

        assert "Mall #1 (City Center Mall): Mall latitude out of Qatar range (30.1)" in issues
        assert "Mall #1 (City Center Mall): Mall longitude out of Qatar range (49.0)" in issues

    def test_missing_mall_fields(self, sample_malls):
        """Test required mall fields."""
        del sample_malls[0]["name"]
        issues = validate_dataset(sample_malls)
        assert "Mall #1 (unknown): Missing mall name" in issues

    def test_store_issues(self, sample_malls):
        """Test store field, id and coordinate checks."""
        store = sample_malls[0]["stores"][1]
        store["type"] = ""
        store["id"] = 1
        store["latitude"] = 51.5
        store["longitude"] = 25.3

        issues = validate_dataset(sample_malls)
        prefix = "Store #2 in City Center Mall (Tech Hub): "

        assert prefix + "Missing type" in issues
        assert prefix + "Duplicate id" in issues
        assert prefix + "Latitude out of Qatar range (51.5)" in issues
        assert prefix + "Longitude out of Qatar range (25.3)" in issues

    def test_swapped_coordinates(self, sample_malls):
        """Test detection of likely swapped latitude/longitude."""
        store = sample_malls[0]["stores"][0]
        store["latitude"] = 5.0
        store["longitude"] = 51.5

        issues = validate_dataset(sample_malls)

        assert "Store #1 in City Center Mall (Fashion Forward): Possible swapped lat/lng" in issues

    def test_store_ids_unique_across_malls(self, sample_malls):
        """Test that a store id reused in another mall is a duplicate."""
        sample_malls[1]["stores"][0]["id"] = 1
        issues = validate_dataset(sample_malls)
        assert "Store #1 in Doha Festival City (Gourmet Corner): Duplicate id" in issues

    def test_non_numeric_coordinate(self, sample_malls):
        """Test that a string coordinate is flagged."""
        sample_malls[0]["latitude"] = "north"
        issues = validate_dataset(sample_malls)
        assert "Mall #1 (City Center Mall): Invalid mall latitude ('north')" in issues

    def test_count_stores(self, sample_malls):
        """Test store counting."""
        assert count_stores(sample_malls) == 4


@pytest.mark.unit
class TestValidateScript:
    """Test the command line entry point."""

    def test_valid_file(self, data_file, capsys):
        """Test exit status 0 and summary for a clean file."""
        assert validate_main([str(data_file)]) == 0
        assert "Validated 2 malls with 4 total stores" in capsys.readouterr().out

    def test_file_with_issues(self, tmp_path, sample_malls, capsys):
        """Test exit status 1 and issue listing."""
        sample_malls[0]["latitude"] = 10.0
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(sample_malls), encoding="utf-8")

        assert validate_main([str(path)]) == 1
        assert "Mall latitude out of Qatar range" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        """Test exit status 1 when the file does not exist."""
        assert validate_main([str(tmp_path / "nope.json")]) == 1
