"""프롬프트 구성 테스트"""

from app.domain.changelog.composer import (
    NO_FILE_DETAILS,
    compose_prompt,
    format_commit_messages,
    format_file_changes,
    truncate_text,
)
from app.domain.changelog.constants import TRUNCATION_MARKER
from app.domain.changelog.prompts import CHANGELOG_GENERATOR_SYSTEM
from app.domain.changelog.schemas import ChangeType, FileChange


class TestTruncateText:
    def test_short_text_unchanged(self):
        assert truncate_text("hello", 10) == "hello"

    def test_long_text_marked(self):
        result = truncate_text("x" * 100, 10)

        assert result.startswith("x" * 10)
        assert TRUNCATION_MARKER.format(count=90) in result


class TestFormatCommitMessages:
    def test_first_lines_only(self, make_commit):
        commits = [
            make_commit("a1", "Fix login bug\n\nLong description"),
            make_commit("a2", "Add dark mode"),
        ]

        result = format_commit_messages(commits)

        assert result == "- Fix login bug\n- Add dark mode"

    def test_empty_messages(self, make_commit):
        assert format_commit_messages([make_commit("a1", "   ")]) == "- (no commit messages)"


class TestFormatFileChanges:
    def test_without_files(self, make_commit):
        assert format_file_changes([make_commit("a1")], 100, 1000) == NO_FILE_DETAILS

    def test_includes_component_and_counts(self, sample_commits):
        result = format_file_changes(sample_commits, 1500, 10000)

        assert "File: src/app/api/auth/route.ts [api]" in result
        assert "Changes: 12 additions, 3 deletions" in result
        assert "File: styles/theme.css [styles]" in result

    def test_patch_truncated_per_file(self, make_commit):
        commit = make_commit("a1", files=[FileChange(path="lib/big.py", additions=1, patch="y" * 500)])

        result = format_file_changes([commit], 50, 10000)

        assert "y" * 51 not in result
        assert TRUNCATION_MARKER.format(count=450) in result

    def test_omits_files_over_budget(self, make_commit):
        files = [FileChange(path=f"lib/f{i}.py", additions=1, patch="z" * 200) for i in range(10)]

        result = format_file_changes([make_commit("a1", files=files)], 1500, 600)

        assert "File: lib/f0.py" in result
        assert "File: lib/f9.py" not in result
        assert "more file diffs omitted" in result


class TestComposePrompt:
    def test_contains_context(self, sample_commits):
        prompt = compose_prompt(sample_commits, ChangeType.FIX)

        assert "This release is a Fix release." in prompt
        assert "Commit messages (2):" in prompt
        assert "- Fix login bug" in prompt
        assert "- Add dark mode" in prompt
        assert "File: src/components/ThemeToggle.tsx [ui]" in prompt

    def test_respects_size_budget(self, make_commit):
        """시스템 프롬프트를 포함한 전체 크기가 제한을 넘지 않음"""
        commits = [
            make_commit(
                f"c{i}",
                f"Change number {i} " + "word " * 20,
                files=[FileChange(path=f"src/module_{i}.py", additions=5, deletions=2, patch="+" * 800)],
            )
            for i in range(30)
        ]

        prompt = compose_prompt(commits, max_patch_chars=500, max_chars=6000)

        assert len(CHANGELOG_GENERATOR_SYSTEM) + len(prompt) <= 6000
        assert "more file diffs omitted" in prompt

    def test_basic_commits_without_files(self, make_commit):
        prompt = compose_prompt([make_commit("a1", "Add export button")])

        assert NO_FILE_DETAILS in prompt
        assert "This release is a Feature release." in prompt
