"""Tests for filtering and grouping of parsed commits."""

import unittest
from types import MappingProxyType

from tag_changelog.config.loader import ChangelogConfig
from tag_changelog.grouping.grouper import build_section, group_section, group_title
from tag_changelog.vcs.git_client import Commit


def make_commit(sha: str, message: str) -> Commit:
    return Commit(sha=sha * 40, author_name="Dev", message=message, timestamp=0)


def make_config(titles=None, ignore: str = "") -> ChangelogConfig:
    return ChangelogConfig(ignore=ignore, title_maps=MappingProxyType(dict(titles or {})))


class TestBuildSection(unittest.TestCase):
    def test_filters_ignored_commits_and_keeps_order(self) -> None:
        commits = [
            make_commit("3", "feat: newest"),
            make_commit("2", "chore: release [skip changelog]"),
            make_commit("1", "fix: oldest"),
        ]
        section = build_section("v1.0.0", commits, make_config(ignore="[skip changelog]"))
        self.assertEqual(section.tag_name, "v1.0.0")
        self.assertEqual([e.subject for e in section.entries], ["newest", "oldest"])

    def test_ignored_breaking_commit_is_dropped(self) -> None:
        commits = [make_commit("1", "feat!: remove api [skip changelog]")]
        config = make_config({"feat": "Features"}, ignore="[skip changelog]")
        section = build_section("v1", commits, config)
        grouped = group_section(section, config)
        self.assertEqual(section.entries, [])
        self.assertEqual(grouped.breaking.commits, [])
        self.assertEqual(grouped.groups, [])

    def test_empty_ignore_keeps_everything(self) -> None:
        commits = [make_commit("1", "feat: a"), make_commit("2", "no prefix")]
        section = build_section("v1", commits, make_config())
        self.assertEqual(len(section.entries), 2)


class TestGroupSection(unittest.TestCase):
    def test_round_trip_scenario(self) -> None:
        commits = [
            make_commit("3", "feat: add x"),
            make_commit("2", "fix(api)!: break y"),
            make_commit("1", "chore: cleanup"),
        ]
        config = make_config({"feat": "Features", "fix": "Bug Fixes"})
        grouped = group_section(build_section("v2", commits, config), config)

        self.assertEqual(grouped.breaking.title, "Breaking Changes")
        self.assertEqual([e.subject for e in grouped.breaking.commits], ["break y"])
        self.assertEqual([g.title for g in grouped.groups], ["Features"])
        self.assertEqual([e.subject for e in grouped.groups[0].commits], ["add x"])

    def test_groups_follow_configured_order(self) -> None:
        commits = [
            make_commit("4", "feat: f1"),
            make_commit("3", "docs: d1"),
            make_commit("2", "fix: x1"),
            make_commit("1", "feat: f2"),
        ]
        config = make_config({"fix": "Bug Fixes", "docs": "Docs", "feat": "Features"})
        grouped = group_section(build_section("v1", commits, config), config)
        self.assertEqual([g.type for g in grouped.groups], ["fix", "docs", "feat"])
        self.assertEqual([e.subject for e in grouped.groups[2].commits], ["f1", "f2"])

    def test_other_bucket_is_appended_last(self) -> None:
        commits = [make_commit("2", "Random message"), make_commit("1", "feat: f")]
        config = make_config({"feat": "Features"})
        grouped = group_section(build_section("v1", commits, config), config)
        self.assertEqual([g.type for g in grouped.groups], ["feat", "other"])
        self.assertEqual(grouped.groups[1].title, "Other")

    def test_configured_other_keeps_its_position_and_title(self) -> None:
        commits = [make_commit("2", "Random message"), make_commit("1", "feat: f")]
        config = make_config({"other": "Misc", "feat": "Features"})
        grouped = group_section(build_section("v1", commits, config), config)
        self.assertEqual([g.title for g in grouped.groups], ["Misc", "Features"])

    def test_groups_without_commits_are_skipped(self) -> None:
        config = make_config({"feat": "Features", "fix": "Bug Fixes"})
        grouped = group_section(build_section("v1", [make_commit("1", "fix: y")], config), config)
        self.assertEqual([g.type for g in grouped.groups], ["fix"])

    def test_breaking_key_is_not_a_commit_group(self) -> None:
        commits = [make_commit("1", "breaking: odd type")]
        config = make_config({"breaking": "Heads Up"})
        grouped = group_section(build_section("v1", commits, config), config)
        self.assertEqual(grouped.breaking.title, "Heads Up")
        self.assertEqual(grouped.groups, [])

    def test_breaking_entries_are_not_repeated_in_type_groups(self) -> None:
        commits = [make_commit("2", "feat!: big"), make_commit("1", "feat: small")]
        config = make_config({"feat": "Features"})
        grouped = group_section(build_section("v1", commits, config), config)
        self.assertEqual([e.subject for e in grouped.breaking.commits], ["big"])
        self.assertEqual([e.subject for e in grouped.groups[0].commits], ["small"])

    def test_group_title_fallbacks(self) -> None:
        config = make_config({"feat": "Features", "fix": ""})
        self.assertEqual(group_title("feat", config), "Features")
        self.assertEqual(group_title("breaking", config), "Breaking Changes")
        self.assertEqual(group_title("other", config), "Other")
        self.assertEqual(group_title("fix", config), "Fix")


if __name__ == "__main__":
    unittest.main()
