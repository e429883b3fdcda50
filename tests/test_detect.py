"""Tests for Terraform detection and the HCL syntax check."""

from pathlib import Path

import pytest

from action.src.detect import find_tf_files, parse_tf_file


class TestFindTfFiles:
    """Tests for find_tf_files function."""

    def test_finds_module_files(self, template_root):
        """Should find every .tf file of a module."""
        module = template_root / "modules" / "clusters" / "eks"
        names = [path.name for path in find_tf_files(module)]

        assert names == sorted(names)
        assert "vpc.tf" in names
        assert "node_groups.tf" in names
        assert len(names) == 7

    def test_empty_directory(self, tmp_path):
        """Should return an empty list for a directory without .tf files."""
        assert find_tf_files(tmp_path) == []

    def test_missing_directory(self, tmp_path):
        """Should return an empty list for a directory that does not exist."""
        assert find_tf_files(tmp_path / "absent") == []

    def test_excludes_terraform_directory(self, tmp_path):
        """Should exclude .terraform directory."""
        terraform_dir = tmp_path / ".terraform"
        terraform_dir.mkdir()
        (terraform_dir / "providers.tf").write_text("# provider cache")
        (tmp_path / "main.tf").write_text("# main config")

        result = find_tf_files(tmp_path)

        assert result == [tmp_path.resolve() / "main.tf"]

    def test_nested_terraform_files(self, tmp_path):
        """Should find .tf files in subdirectories."""
        subdir = tmp_path / "modules" / "vpc"
        subdir.mkdir(parents=True)
        (subdir / "main.tf").write_text("# vpc module")
        (tmp_path / "main.tf").write_text("# root config")

        assert len(find_tf_files(tmp_path)) == 2

    def test_ignores_other_extensions(self, tmp_path):
        """Should skip tfvars and lockfiles."""
        (tmp_path / "terraform.tfvars").write_text('name = "x"')
        (tmp_path / ".terraform.lock.hcl").write_text("# lockfile")

        assert find_tf_files(tmp_path) == []


class TestParseTfFile:
    """Tests for parse_tf_file function."""

    def test_parses_valid_tf_file(self, template_root):
        """Should parse a valid Terraform file."""
        result = parse_tf_file(template_root / "modules" / "compliance" / "main.tf")

        assert result is not None
        assert "resource" in result

    def test_parses_every_fixture_module_file(self, template_root):
        """Should accept every .tf file under modules/."""
        for tf_file in find_tf_files(template_root / "modules"):
            assert parse_tf_file(tf_file) is not None, tf_file

    def test_returns_none_for_invalid_file(self, tmp_path):
        """Should return None for invalid HCL."""
        invalid_file = tmp_path / "invalid.tf"
        invalid_file.write_text('resource "aws_s3_bucket" "x" {\n  bucket = \n')

        assert parse_tf_file(invalid_file) is None

    def test_raises_for_missing_file(self, tmp_path):
        """Should let read errors propagate instead of reporting invalid HCL."""
        with pytest.raises(FileNotFoundError):
            parse_tf_file(tmp_path / "nonexistent.tf")
