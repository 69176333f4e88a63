"""
Tests for platform and mod version precedence.
"""

import os

import pytest

from modbuild.core.errors import MalformedStructuredFile, ResolutionError
from modbuild.core.version import VersionValue
from modbuild.core.version_resolver import ResolvedVersionSet, VersionResolver


def make_resolver(work_dir, **variables):
    environ = dict(os.environ)
    environ.update(variables)
    return VersionResolver(cwd=str(work_dir), environ=environ)


class TestPlatformVersion:
    def test_explicit_wins_over_environment(self, work_dir, write_json):
        write_json({"KSP_VERSION": "2.3.4", "KSP_VERSION_MAX": "2.3.4"})
        (work_dir / "KSP_VERSION").write_text("2.3.4\n")
        resolver = make_resolver(work_dir, KSP_VERSION="2.3.4")
        assert resolver.resolve_platform_version("1.2.3").to_string() == "1.2.3"

    def test_environment_wins_over_files(self, work_dir, write_json):
        write_json({"KSP_VERSION": "2.3.4"})
        (work_dir / "KSP_VERSION").write_text("2.3.4\n")
        resolver = make_resolver(work_dir, KSP_VERSION="1.2.3")
        assert resolver.resolve_platform_version(None).to_string() == "1.2.3"

    def test_structured_file_wins_over_plain_file(self, work_dir, write_json):
        write_json({"KSP_VERSION": "1.2.3", "ksp_version_max": "2.3.4"})
        (work_dir / "KSP_VERSION").write_text("2.3.4\n")
        assert make_resolver(work_dir).resolve_platform_version().to_string() == "1.2.3"

    def test_plain_file_wins_over_maximum_bound(self, work_dir, write_json):
        write_json({"ksp_version_max": "2.3.4"})
        (work_dir / "KSP_VERSION").write_text("1.2.3\n")
        assert make_resolver(work_dir).resolve_platform_version().to_string() == "1.2.3"

    def test_maximum_bound_from_structured_file(self, work_dir, write_json):
        write_json({"KSP_VERSION_MIN": "1.8.0", "KSP_VERSION_MAX": "1.12.5"})
        assert make_resolver(work_dir).resolve_platform_version().to_string() == "1.12.5"

    def test_maximum_bound_from_environment(self, work_dir):
        resolver = make_resolver(work_dir, KSP_VERSION_MAX="1.2.3")
        assert resolver.resolve_platform_version().to_string() == "1.2.3"

    def test_structured_file_without_relevant_keys_falls_through(self, work_dir, write_json):
        write_json({})
        resolver = make_resolver(work_dir, KSP_VERSION_MAX="1.2.3")
        assert resolver.resolve_platform_version().to_string() == "1.2.3"

    def test_malformed_structured_file(self, work_dir):
        (work_dir / "KSP_VERSION.json").write_text("KSP_VERSION: 1.2.3")
        resolver = make_resolver(work_dir, KSP_VERSION_MAX="1.2.3")
        with pytest.raises(MalformedStructuredFile):
            resolver.resolve_platform_version()

    def test_minimum_bound_alone_is_not_a_platform_version(self, work_dir, write_json):
        write_json({"KSP_VERSION_MIN": "1.2.3"})
        with pytest.raises(ResolutionError, match="^platform version not specified"):
            make_resolver(work_dir).resolve_platform_version()

    def test_unresolvable(self, work_dir):
        with pytest.raises(ResolutionError, match="^platform version not specified and no way to determine it$"):
            make_resolver(work_dir).resolve_platform_version()


class TestPlatformBounds:
    def test_bounds_default_to_platform_version(self, work_dir):
        resolver = make_resolver(work_dir)
        platform = VersionValue.parse("1.2.3")
        assert resolver.resolve_platform_version_min(platform) == platform
        assert resolver.resolve_platform_version_max(platform) == platform

    def test_bounds_from_structured_file(self, work_dir, write_json):
        write_json({"KSP_VERSION_MIN": "1.2.3", "KSP_VERSION_MAX": "2.3.4"})
        resolver = make_resolver(work_dir)
        platform = VersionValue.parse("2.0")
        assert resolver.resolve_platform_version_min(platform).to_string() == "1.2.3"
        assert resolver.resolve_platform_version_max(platform).to_string() == "2.3.4"

    def test_environment_wins_over_structured_file(self, work_dir, write_json):
        write_json({"KSP_VERSION_MIN": "2.3.4", "KSP_VERSION_MAX": "2.3.4"})
        resolver = make_resolver(work_dir, KSP_VERSION_MIN="1.2.3", KSP_VERSION_MAX="3.4.5")
        platform = VersionValue.parse("3.0")
        assert resolver.resolve_platform_version_min(platform).to_string() == "1.2.3"
        assert resolver.resolve_platform_version_max(platform).to_string() == "3.4.5"


class TestPackageVersion:
    def test_explicit_wins_over_environment(self, work_dir):
        resolver = make_resolver(work_dir, MOD_VERSION="2.3.4")
        assert resolver.resolve_package_version("1.2.3").to_string() == "1.2.3"

    def test_environment(self, work_dir):
        resolver = make_resolver(work_dir, MOD_VERSION="1.2.3")
        assert resolver.resolve_package_version().to_string() == "1.2.3"

    def test_unresolvable_outside_git(self, work_dir):
        with pytest.raises(ResolutionError, match="^package version not specified and no way to determine it$"):
            VersionResolver(cwd=str(work_dir)).resolve_package_version()

    def test_from_git_tag_with_commits(self, git_repo, work_dir):
        git_repo(commits=1, tag="v1.2.3", commits_since_tag=1)
        assert VersionResolver(cwd=str(work_dir)).resolve_package_version().to_string() == "1.2.3.1"

    def test_from_git_tag_exactly(self, git_repo, work_dir):
        git_repo(commits=1, tag="v1.2.3")
        assert VersionResolver(cwd=str(work_dir)).resolve_package_version().to_string() == "1.2.3"

    def test_environment_wins_over_git(self, git_repo, work_dir, monkeypatch):
        git_repo(commits=1, tag="v2.3.4", commits_since_tag=1)
        monkeypatch.setenv("MOD_VERSION", "1.2.3")
        assert VersionResolver(cwd=str(work_dir)).resolve_package_version().to_string() == "1.2.3"

    def test_git_without_tags(self, git_repo, work_dir):
        git_repo(commits=1)
        with pytest.raises(ResolutionError):
            VersionResolver(cwd=str(work_dir)).resolve_package_version()


class TestRepositoryDescriptor:
    def test_none_outside_git(self, work_dir):
        assert VersionResolver(cwd=str(work_dir)).resolve_repository_descriptor() is None

    def test_full_description(self, git_repo, work_dir):
        git = git_repo(commits=1, tag="v1.2.3", commits_since_tag=1)
        revision = git("rev-parse", "--short", "HEAD")
        descriptor = VersionResolver(cwd=str(work_dir)).resolve_repository_descriptor()
        assert descriptor == f"v1.2.3-1-g{revision}"

    def test_at_tag(self, git_repo, work_dir):
        git_repo(commits=1, tag="v1.2.3")
        assert VersionResolver(cwd=str(work_dir)).resolve_repository_descriptor() == "v1.2.3"


class TestResolve:
    def test_resolved_set(self, work_dir, write_json):
        write_json({"KSP_VERSION_MIN": "1.8"})
        resolved = make_resolver(work_dir).resolve("1.12.5", "0.4.2")
        assert isinstance(resolved, ResolvedVersionSet)
        assert resolved.platform_version.to_string() == "1.12.5"
        assert resolved.package_version.to_string() == "0.4.2"
        assert resolved.platform_version_min.to_string() == "1.8"
        assert resolved.platform_version_max == resolved.platform_version
        assert resolved.repository_descriptor is None

    def test_platform_failure_reported_first(self, work_dir):
        with pytest.raises(ResolutionError, match="platform"):
            make_resolver(work_dir).resolve(None, None)

    def test_resolved_set_is_frozen(self):
        resolved = ResolvedVersionSet(VersionValue.parse("1"), VersionValue.parse("2"))
        with pytest.raises(AttributeError):
            resolved.package_version = VersionValue.parse("3")
