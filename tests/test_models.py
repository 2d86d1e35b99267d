"""
Tests for the repository and PR models.
"""

import pytest
from pydantic import ValidationError

from dependabot_merger.exceptions import InvalidRepositoryError
from dependabot_merger.models import RepositoryRef


class TestRepositoryRef:
    """Test RepositoryRef parsing."""

    def test_parse(self):
        ref = RepositoryRef.parse("test-org/repo-a")
        assert ref.org == "test-org"
        assert ref.repo == "repo-a"
        assert ref.full_name == "test-org/repo-a"
        assert str(ref) == "test-org/repo-a"

    @pytest.mark.parametrize(
        "value", ["", "repo-a", "/repo-a", "test-org/", "a/b/c", "/"]
    )
    def test_parse_invalid(self, value):
        with pytest.raises(InvalidRepositoryError):
            RepositoryRef.parse(value)

    def test_empty_parts_rejected(self):
        with pytest.raises(ValidationError):
            RepositoryRef(org="", repo="repo-a")

    def test_immutable(self):
        ref = RepositoryRef.parse("test-org/repo-a")
        with pytest.raises(ValidationError):
            ref.org = "other"


class TestDependencyPr:
    """Test DependencyPr helpers."""

    def test_has_build_metadata(self, make_pr):
        assert make_pr(1, target_version="1.2.3a0+210.bafdcd99").has_build_metadata
        assert not make_pr(2, target_version="1.2.4-alpha").has_build_metadata
        assert not make_pr(3, target_version="").has_build_metadata

    def test_immutable(self, make_pr):
        pr = make_pr(1)
        with pytest.raises(ValidationError):
            pr.is_rebased = False
