"""Text helpers shared by step titles and item details."""

# Two spaces either side of a middle dot
SEPARATOR = "  •  "


def pluralize(word: str, count: int) -> str:
    """'1 commit', '0 commits', '3 commits'."""
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def title_with(title: str, suffix: str) -> str:
    return f"{title}{SEPARATOR}{suffix}"
