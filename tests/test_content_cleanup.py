from __future__ import annotations

from smarttube.domain.services.content_cleanup import (
    clean_hashtags,
    clean_hooks,
    clean_keywords,
    clean_markdown_block,
    clean_titles,
    clean_video_ideas,
)


def test_clean_markdown_block_strips_boxed_fence():
    assert clean_markdown_block("\\boxed{```markdown\n# Title\nBody\n```}") == "# Title\nBody"


def test_clean_markdown_block_keeps_plain_text():
    assert clean_markdown_block("  Just a description.  ") == "Just a description."


def test_clean_titles_removes_numbering_quotes_and_backslashes():
    content = '\\boxed{1. "First Title"\n2. Second Title\\\\\n\n3. Third}'

    assert clean_titles(content) == ["First Title", "Second Title", "Third"]


def test_clean_hashtags_normalizes_prefix_and_drops_bare_hash():
    content = '\\boxed{["#travel", "vlog", "##tips", "#"]}'

    assert clean_hashtags(content) == ["#travel", "#vlog", "#tips"]


def test_clean_keywords_splits_on_commas_and_lines():
    content = "\\boxed{\n[\nseo tips, youtube growth\nvideo marketing\n]\n}"

    assert clean_keywords(content) == ["seo tips", "youtube growth", "video marketing"]


def test_clean_keywords_drops_preamble_before_bracket_line():
    content = "Here are the keywords:\n[\nseo tips\nyoutube growth\n]"

    assert clean_keywords(content) == ["seo tips", "youtube growth"]


def test_clean_hooks_strips_wrapper_and_numbering():
    content = "\\boxed{\n1. Did you know this?\n2. Stop scrolling now\n}"

    assert clean_hooks(content) == ["Did you know this?", "Stop scrolling now"]


def test_clean_video_ideas_removes_separators():
    content = "\\boxed{\n---\n## Idea 1\nGreat idea\n---\n}"

    assert clean_video_ideas(content) == "## Idea 1\nGreat idea"


def test_cleanup_of_empty_answer_is_empty():
    assert clean_titles("") == []
    assert clean_hashtags("\\boxed{}") == []
    assert clean_markdown_block("```markdown\n```") == ""
