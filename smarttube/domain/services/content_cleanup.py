"""Scrub wrapper artifacts out of chat-completion responses.

Models often wrap their answer in a LaTeX ``\\boxed{...}`` block, a fenced
markdown block, or list brackets. Each tool has its own cleanup because the
expected shape differs (free text, one item per line, whitespace separated
tags).
"""

from __future__ import annotations

import re


_MARKDOWN_WRAPPERS = (
    re.compile(r"^\\boxed\{\s*```markdown\s*", re.IGNORECASE),
    re.compile(r"^\\boxed\{\s*```text\s*", re.IGNORECASE),
    re.compile(r"```\s*\}\s*$", re.IGNORECASE),
    re.compile(r"^```markdown\s*", re.IGNORECASE),
    re.compile(r"^```text\s*", re.IGNORECASE),
    re.compile(r"```\s*$", re.IGNORECASE),
    re.compile(r"^\\boxed\{\s*", re.IGNORECASE),
    re.compile(r"\}\s*$", re.IGNORECASE),
)

_TITLE_WRAPPER = re.compile(r"^\\boxed\{|\}\Z")
_TITLE_NOISE = re.compile(r'^\d+\.\s*|"|\\')

_HASHTAG_NOISE = re.compile(r"\\boxed\{|```python|```|\[|\]|\}")
_WHITESPACE = re.compile(r"\s+")

_KEYWORD_HEAD_WRAPPER = re.compile(r"\\boxed|\[|\]")
_KEYWORD_TAIL_WRAPPER = re.compile(r"\}|\]")
_KEYWORD_SEPARATORS = re.compile(r"[\n,]+")
_BRACKET_ONLY = re.compile(r"^\s*[\[\]\}]\s*$")

_HOOK_HEAD_WRAPPER = re.compile(r"\\boxed|\{")
_NUMBERING = re.compile(r"^\d+\.\s*")

_BOXED_OPEN = re.compile(r"^\\boxed\{\s*", re.IGNORECASE)
_TRAILING_BRACE = re.compile(r"\s*\}\s*$")


def clean_markdown_block(content: str) -> str:
    """Used for scripts, descriptions and optimized descriptions."""
    for pattern in _MARKDOWN_WRAPPERS:
        content = pattern.sub("", content, count=1)
    return content.strip()


def clean_titles(content: str) -> list[str]:
    content = _TITLE_WRAPPER.sub("", content)
    titles: list[str] = []
    for line in content.split("\n"):
        if not line.strip():
            continue
        title = _TITLE_NOISE.sub("", line).strip()
        if title:
            titles.append(title)
    return titles


def clean_hashtags(content: str) -> list[str]:
    content = _HASHTAG_NOISE.sub("", content)
    hashtags: list[str] = []
    for word in _WHITESPACE.split(content):
        word = word.strip()
        if not word:
            continue
        word = word.replace('"', "").replace("'", "").replace(",", "")
        tag = "#" + word.lstrip("#")
        if len(tag) > 1:
            hashtags.append(tag)
    return hashtags


def clean_keywords(content: str) -> list[str]:
    content = _BOXED_OPEN.sub("", content, count=1)
    content = re.sub(r"^\s*\[\s*", "", content, count=1)
    content = re.sub(r"\s*\]\s*$", "", content, count=1)
    content = _TRAILING_BRACE.sub("", content, count=1)

    lines = content.split("\n")
    start, end = 0, len(lines)
    if len(lines) > 2:
        # at most two wrapper lines on each side
        if _KEYWORD_HEAD_WRAPPER.search(lines[0]):
            start = 1
        if _KEYWORD_HEAD_WRAPPER.search(lines[1]):
            start = 2
        if _KEYWORD_TAIL_WRAPPER.search(lines[-1]):
            end = len(lines) - 1
            if len(lines) > 3 and _KEYWORD_TAIL_WRAPPER.search(lines[-2]):
                end = len(lines) - 2

    keywords: list[str] = []
    for keyword in _KEYWORD_SEPARATORS.split("\n".join(lines[start:end])):
        keyword = keyword.strip()
        if not keyword or "\\boxed{" in keyword or _BRACKET_ONLY.match(keyword):
            continue
        keywords.append(keyword)
    return keywords


def clean_hooks(content: str) -> list[str]:
    content = _BOXED_OPEN.sub("", content, count=1)
    content = _TRAILING_BRACE.sub("", content, count=1)

    lines = content.split("\n")
    start, end = 0, len(lines)
    if len(lines) > 1 and _HOOK_HEAD_WRAPPER.search(lines[0]):
        start = 1
    if len(lines) > 1 and "}" in lines[-1]:
        end = len(lines) - 1

    hooks: list[str] = []
    for line in lines[start:end]:
        hook = line.strip()
        if not hook or "\\boxed{" in hook or hook == "}":
            continue
        hooks.append(_NUMBERING.sub("", hook))
    return hooks


def clean_video_ideas(content: str) -> str:
    content = content.replace("\\boxed{", "")
    content = re.sub(r"^---", "", content, flags=re.MULTILINE)
    content = re.sub(r"\}\Z", "", content)
    return content.strip()
