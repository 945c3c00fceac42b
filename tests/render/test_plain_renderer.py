import unittest
from types import MappingProxyType

from tag_changelog.config.loader import ChangelogConfig
from tag_changelog.grouping.grouper import build_section
from tag_changelog.render.plain import PlainRenderer
from tag_changelog.vcs.git_client import Commit


def make_commit(sha: str, message: str) -> Commit:
    return Commit(sha=sha * 40, author_name="Dev", message=message, timestamp=0)


class TestPlainRenderer(unittest.TestCase):
    def setUp(self) -> None:
        self.config = ChangelogConfig(
            title_maps=MappingProxyType({"feat": "Features", "fix": "Bug Fixes"}),
            output_format="list",
        )

    def test_itemized_listing(self) -> None:
        commits = [
            make_commit("4", "feat(cli): add --current flag"),
            make_commit("3", "fix: handle empty repo"),
            make_commit("2", "Tidy up"),
            make_commit("1", "feat!: new config format\n\nBREAKING CHANGE: title_maps moved"),
        ]
        output = PlainRenderer(self.config, current="v2.0.0").render(
            [build_section("v2.0.0", commits, self.config)]
        )
        expected = (
            "## v2.0.0 - Current Release\n"
            "\n"
            "### ⚠️  Breaking Changes\n"
            "\n"
            "- `1111111` title_maps moved\n"
            "\n"
            "### Features\n"
            "\n"
            "- `4444444` **cli:** add --current flag\n"
            "\n"
            "### Bug Fixes\n"
            "\n"
            "- `3333333` handle empty repo\n"
            "\n"
            "### Other\n"
            "\n"
            "- `2222222` Tidy up\n"
            "\n"
        )
        self.assertEqual(output, expected)

    def test_pipes_are_left_alone(self) -> None:
        output = PlainRenderer(self.config).render(
            [build_section("v1", [make_commit("1", "fix: a | b")], self.config)]
        )
        self.assertIn("- `1111111` a | b", output)

    def test_empty_section(self) -> None:
        output = PlainRenderer(self.config).render([build_section("v1", [], self.config)])
        self.assertEqual(output, "## v1\n\n_No commits between these tags_\n\n")


if __name__ == "__main__":
    unittest.main()
